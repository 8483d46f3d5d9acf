from jsast.core.locator import find_nodejs_installation, search_dirs

from conftest import make_executable


def test_first_match_on_path(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    make_executable(a / "node")
    make_executable(b / "node")
    env = {"PATH": f"{a}:{b}"}
    assert find_nodejs_installation(env, fallback_dirs=()) == a / "node"


def test_skips_non_executable_and_directories(tmp_path):
    a = tmp_path / "a"
    a.mkdir()
    (a / "node").write_text("not executable")
    b = tmp_path / "b"
    (b / "node").mkdir(parents=True)
    c = tmp_path / "c"
    make_executable(c / "node")
    env = {"PATH": f"{a}:{b}:{c}"}
    assert find_nodejs_installation(env, fallback_dirs=()) == c / "node"


def test_fallback_directory_is_searched_last(tmp_path):
    fallback = tmp_path / "homebrew"
    make_executable(fallback / "node")
    empty = tmp_path / "empty"
    empty.mkdir()
    assert find_nodejs_installation({"PATH": str(empty)}, fallback_dirs=[str(fallback)]) == fallback / "node"

    on_path = tmp_path / "usr"
    make_executable(on_path / "node")
    found = find_nodejs_installation({"PATH": str(on_path)}, fallback_dirs=[str(fallback)])
    assert found == on_path / "node"


def test_nothing_found(tmp_path):
    env = {"PATH": str(tmp_path)}
    assert find_nodejs_installation(env, fallback_dirs=[str(tmp_path / "missing")]) is None


def test_missing_path_variable_skips_fallback(tmp_path):
    fallback = tmp_path / "homebrew"
    make_executable(fallback / "node")
    assert find_nodejs_installation({}, fallback_dirs=[str(fallback)]) is None


def test_custom_binary_name(tmp_path):
    make_executable(tmp_path / "nodejs")
    assert find_nodejs_installation({"PATH": str(tmp_path)}, binary="nodejs", fallback_dirs=()) == tmp_path / "nodejs"
    assert find_nodejs_installation({"PATH": str(tmp_path)}, fallback_dirs=()) is None


def test_search_dirs_drops_empty_components():
    assert search_dirs({"PATH": "/x::/y:"}, fallback_dirs=["/opt/homebrew/bin"]) == ["/x", "/y", "/opt/homebrew/bin"]
    assert search_dirs({}) is None


def test_relative_path_entry_gives_absolute_result(tmp_path, monkeypatch):
    make_executable(tmp_path / "bin" / "node")
    monkeypatch.chdir(tmp_path)
    found = find_nodejs_installation({"PATH": "bin"}, fallback_dirs=())
    assert found.is_absolute()
    assert found == tmp_path / "bin" / "node"

    # the handle stays valid after the working directory changes
    monkeypatch.chdir(tmp_path.parent)
    assert found.is_file()
