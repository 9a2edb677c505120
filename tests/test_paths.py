"""Tests for glob path matching."""

import os

import pytest

from hookwright.paths import (
    broken_symlink,
    convert_glob_to_absolute,
    filter_paths,
    matches_path,
)


class TestMatchesPath:
    def test_wildcard_does_not_cross_separator(self):
        assert not matches_path("*.rb", "lib/foo.rb")
        assert matches_path("*.rb", "foo.rb")

    def test_double_star_crosses_directories(self):
        assert matches_path("**/*.rb", "lib/foo.rb")
        assert matches_path("**/*.rb", "lib/deep/nested/foo.rb")

    def test_double_star_matches_zero_directories(self):
        assert matches_path("**/*.rb", "foo.rb")

    def test_dotfiles_are_matched(self):
        assert matches_path(".*", ".gitignore")
        assert matches_path("*", ".travis.yml")
        assert matches_path("**/*.yml", ".github/workflows/ci.yml")

    @pytest.mark.parametrize(
        "pattern,path,expected",
        [
            ("lib/?.rb", "lib/a.rb", True),
            ("lib/?.rb", "lib/ab.rb", False),
            ("lib/[ab].rb", "lib/b.rb", True),
            ("lib/[!ab].rb", "lib/b.rb", False),
            ("lib/*", "lib/sub/a.rb", False),
            ("lib/**", "lib/sub/a.rb", False),
            ("lib/**", "lib/sub", True),
            ("lib/**", "lib", False),
            ("lib/**/*", "lib/sub/a.rb", True),
            ("lib/[^ab].rb", "lib/b.rb", False),
            ("lib/[^ab].rb", "lib/c.rb", True),
            ("lib/\\*.rb", "lib/*.rb", True),
            ("lib/\\*.rb", "lib/a.rb", False),
            ("lib/\\[x\\].rb", "lib/[x].rb", True),
            ("src/**/test_*.py", "src/pkg/tests/test_x.py", True),
            ("*.JS", "a.js", False),
        ],
    )
    def test_glob_semantics(self, pattern, path, expected):
        assert matches_path(pattern, path) is expected

    def test_absolute_patterns(self):
        assert matches_path("/repo/**/*.js", "/repo/app/main.js")
        assert not matches_path("/repo/**/*.js", "/other/app/main.js")
        assert not matches_path("/repo/*.js", "repo/main.js")


class TestConvertGlobToAbsolute:
    def test_with_explicit_root(self):
        assert convert_glob_to_absolute("**/*.rb", "/repo") == "/repo/**/*.rb"

    def test_defaults_to_repo_root(self, fake_repo):
        assert convert_glob_to_absolute("*.js") == os.path.join(str(fake_repo.resolve()), "*.js")

    def test_result_matches_absolute_paths(self, fake_repo):
        glob = convert_glob_to_absolute("lib/**/*.rb")
        assert matches_path(glob, str(fake_repo.resolve() / "lib" / "a" / "b.rb"))


def test_filter_paths_preserves_order_and_excludes():
    paths = ["b.js", "vendor/x.js", "a.js", "README.md"]
    assert filter_paths(["**/*.js"], paths, exclude=["vendor/**/*"]) == ["b.js", "a.js"]


def test_broken_symlink(tmp_path):
    target = tmp_path / "target"
    target.write_text("x")
    good = tmp_path / "good"
    good.symlink_to(target)
    bad = tmp_path / "bad"
    bad.symlink_to(tmp_path / "missing")

    assert not broken_symlink(good)
    assert broken_symlink(bad)
    assert not broken_symlink(target)


def test_backslashes_in_paths_are_separators():
    assert matches_path("lib/**/*.rb", "lib\\sub\\a.rb")
