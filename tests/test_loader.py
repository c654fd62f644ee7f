from pathlib import Path

import pytest

from kubediff.core.errors import ManifestNotFoundError, ManifestParseError, ManifestValidationError
from kubediff.loader.loader import ManifestLoader
from kubediff.validator.validator import ManifestValidator

FIXTURES = Path(__file__).parent / "fixtures"

# (manifest, expected error fragment)
INVALID_MANIFESTS = [
    ("kind: Pod\nmetadata:\n  name: web\n", "object 1: missing required field 'apiVersion'"),
    ("apiVersion: ''\nkind: Pod\nmetadata:\n  name: web\n", "object 1: missing required field 'apiVersion'"),
    ("apiVersion: v1\nmetadata:\n  name: web\n", "object 1: missing required field 'kind'"),
    ("apiVersion: v1\nkind: Pod\n", "object 1 (Pod): missing required field 'metadata'"),
    ("apiVersion: v1\nkind: Pod\nmetadata: []\n", "object 1 (Pod): 'metadata' must be a mapping, got list"),
    ("apiVersion: v1\nkind: Pod\nmetadata:\n  labels: {}\n", "object 1 (Pod): missing required field 'metadata.name'"),
    ("apiVersion: v1\nkind: Pod\nmetadata:\n  name: ''\n", "'metadata.name' must be a non-empty string, got str"),
    ("apiVersion: v1\nkind: Pod\nmetadata:\n  name: 42\n", "'metadata.name' must be a non-empty string, got int"),
    ("apiVersion: v1\nkind: Pod\nmetadata:\n  name: web\n  namespace: [a]\n",
     "object 1 (Pod/web): 'metadata.namespace' must be a string, got list"),
    ("- just\n- a list\n", "object 1: document must be a mapping, got list"),
]


@pytest.mark.parametrize("manifest, message", INVALID_MANIFESTS)
def test_invalid_manifests_are_rejected(manifest, message):
    with pytest.raises(ManifestValidationError) as excinfo:
        ManifestLoader().load_text(manifest)
    assert message in str(excinfo.value)


def test_validator_reports_document_position():
    valid, message = ManifestValidator().validate({"apiVersion": "v1"}, 3)
    assert valid is False
    assert message == "object 3: missing required field 'kind'"


def test_validator_accepts_minimal_object():
    valid, _ = ManifestValidator().validate(
        {"apiVersion": "v1", "kind": "Namespace", "metadata": {"name": "prod"}}, 1)
    assert valid is True


def test_multi_document_manifest_skips_empty_documents():
    text = (
        "---\n"
        "apiVersion: v1\nkind: ConfigMap\nmetadata:\n  name: a\n"
        "---\n"
        "# only a comment\n"
        "---\n"
        "apiVersion: v1\nkind: Service\nmetadata:\n  name: b\n  namespace: kube-system\n"
    )

    objects = ManifestLoader().load_text(text, source="inline.yaml")

    assert [o.identity_key for o in objects] == ["ConfigMap/a", "Service/kube-system/b"]
    assert [o.position for o in objects] == [1, 3]
    assert objects[1].source == "inline.yaml"


@pytest.mark.parametrize("namespace, expected", [
    (None, "Deployment/web"),
    ("default", "Deployment/web"),
    ("prod", "Deployment/prod/web"),
])
def test_identity_key_format(namespace, expected):
    metadata = "  name: web\n" + (f"  namespace: {namespace}\n" if namespace else "")
    obj, = ManifestLoader().load_text(f"apiVersion: apps/v1\nkind: Deployment\nmetadata:\n{metadata}")
    assert obj.identity_key == expected


def test_later_document_errors_name_their_position():
    text = "apiVersion: v1\nkind: Pod\nmetadata:\n  name: ok\n---\napiVersion: v1\nkind: Pod\n"
    with pytest.raises(ManifestValidationError, match="object 2 \\(Pod\\)"):
        ManifestLoader().load_text(text)


def test_yaml_syntax_error_is_a_parse_error():
    with pytest.raises(ManifestParseError, match="failed to parse object 1"):
        ManifestLoader().load_text("apiVersion: v1\nkind: [Pod\n")


def test_missing_file(tmp_path):
    missing = tmp_path / "nope.yaml"
    with pytest.raises(ManifestNotFoundError, match="does not exist"):
        ManifestLoader().load_file(str(missing))


def test_directory_is_not_a_manifest(tmp_path):
    with pytest.raises(ManifestNotFoundError):
        ManifestLoader().load_file(str(tmp_path))


def test_bom_prefixed_file_loads(tmp_path):
    manifest = tmp_path / "bom.yaml"
    manifest.write_text("\ufeffapiVersion: v1\nkind: Pod\nmetadata:\n  name: web\n", encoding="utf-8")

    obj, = ManifestLoader().load_file(str(manifest))

    assert obj.api_version == "v1"
    assert obj.name == "web"


def test_fixture_files_load():
    objects = ManifestLoader().load_file(str(FIXTURES / "scenario3" / "manifest2.yaml"))
    assert sorted(o.identity_key for o in objects) == ["ConfigMap/app-config", "Pod/evolving-pod", "Secret/api-token"]


def test_non_utf8_file_is_a_parse_error(tmp_path):
    manifest = tmp_path / "latin1.yaml"
    manifest.write_bytes(b"apiVersion: v1\nkind: ConfigMap\nmetadata:\n  name: cfg\ndata:\n  a: caf\xe9\n")

    with pytest.raises(ManifestParseError, match="not valid UTF-8") as excinfo:
        ManifestLoader().load_file(str(manifest))
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_unreadable_path_is_reported_as_not_found(tmp_path, monkeypatch):
    manifest = tmp_path / "locked.yaml"
    manifest.write_text("apiVersion: v1\n")

    def deny(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(Path, "read_text", deny)

    with pytest.raises(ManifestNotFoundError, match="cannot read file .*Permission denied"):
        ManifestLoader().load_file(str(manifest))
