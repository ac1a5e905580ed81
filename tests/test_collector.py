"""
Directory Collector 測試：遞迴掃描、副檔名過濾、symlink 與讀檔錯誤。
所有測試使用 tmp_path，不汙染實際專案。
"""
import os
import pytest
from pathlib import Path

from material_symbols_subset.collector import SourceFile, get_react_file_contents, read_source_file
from material_symbols_subset.exceptions import FileReadError


def write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestGetReactFileContents:
    def test_recurses_into_subdirectories(self, tmp_path):
        write(tmp_path / "App.tsx", "app")
        write(tmp_path / "components" / "deep" / "Button.jsx", "button")
        files = get_react_file_contents(str(tmp_path))
        contents = sorted(f.content for f in files)
        assert contents == ["app", "button"]

    def test_filters_by_extension(self, tmp_path):
        write(tmp_path / "a.tsx")
        write(tmp_path / "b.jsx")
        write(tmp_path / "c.js")
        write(tmp_path / "d.ts")
        write(tmp_path / "e.css")
        write(tmp_path / "f.json")
        names = sorted(Path(f.path).name for f in get_react_file_contents(str(tmp_path)))
        assert names == ["a.tsx", "b.jsx", "c.js"]

    def test_returns_full_paths_and_content(self, tmp_path):
        f = write(tmp_path / "Icon.tsx", "<span>home</span>")
        files = get_react_file_contents(str(tmp_path))
        assert files == [SourceFile(path=str(f), content="<span>home</span>")]

    def test_empty_directory(self, tmp_path):
        assert get_react_file_contents(str(tmp_path)) == []

    def test_symlinked_directory_not_followed(self, tmp_path):
        real = tmp_path / "real"
        write(real / "A.tsx", "a")
        os.symlink(real, tmp_path / "loop", target_is_directory=True)
        os.symlink(tmp_path, real / "back", target_is_directory=True)
        files = get_react_file_contents(str(tmp_path))
        assert [Path(f.path).name for f in files] == ["A.tsx"]

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_react_file_contents(str(tmp_path / "nope"))


class TestReadSourceFile:
    def test_relative_to_base_dir(self, tmp_path):
        write(tmp_path / "lib" / "icons.jsx", "content")
        source = read_source_file("lib/icons.jsx", str(tmp_path))
        assert source == SourceFile(path="lib/icons.jsx", content="content")

    def test_missing_file_raises_file_read_error(self, tmp_path):
        with pytest.raises(FileReadError) as exc_info:
            read_source_file("missing.tsx", str(tmp_path))
        assert exc_info.value.path == "missing.tsx"

    def test_non_utf8_raises_file_read_error(self, tmp_path):
        (tmp_path / "latin1.js").write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(FileReadError):
            read_source_file("latin1.js", str(tmp_path))
