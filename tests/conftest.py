import pytest


def write_tree(root, files: dict[str, bytes]):
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return root


@pytest.fixture
def make_tree(tmp_path):
    def _make(name: str, files: dict[str, bytes]):
        return write_tree(tmp_path / name, files)

    return _make
