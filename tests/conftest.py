import pytest


@pytest.fixture
def program_file(tmp_path):
    """Write a program list to a file and return its path."""
    def _write(program, name="program.txt"):
        path = tmp_path / name
        path.write_text(",".join(str(w) for w in program) + "\n", encoding="utf-8")
        return path
    return _write
