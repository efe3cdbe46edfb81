"""Tests for input classification and local path validation."""

import os
from unittest.mock import patch

import pytest

from imguri.core.path_validator import PathKind, classify, is_within_directory, validate_local_path
from imguri.errors import PathSecurityViolation


class TestClassify:

    @pytest.mark.parametrize("value", [
        "http://example.com/a.png",
        "https://example.com/a.png",
        "HTTPS://EXAMPLE.COM/A.PNG",
        "Http://example.com",
    ])
    def test_remote(self, value):
        assert classify(value) is PathKind.REMOTE

    @pytest.mark.parametrize("value", [
        "image.png",
        "./images/a.png",
        "/var/www/a.png",
        "ftp://example.com/a.png",
        "http:/example.com/a.png",
        "xhttp://example.com/a.png",
        "",
    ])
    def test_local(self, value):
        assert classify(value) is PathKind.LOCAL


class TestValidateLocalPath:

    @pytest.mark.parametrize("value", [
        "../x",
        "a/../../x",
        "a/b/../../../x",
        "./../x",
        "..",
        "images/../../../etc/passwd",
    ])
    def test_rejects_traversal(self, value, tmp_path):
        with pytest.raises(PathSecurityViolation, match="path traversal"):
            validate_local_path(value, str(tmp_path))

    def test_traversal_error_carries_path(self, tmp_path):
        with pytest.raises(PathSecurityViolation) as exc_info:
            validate_local_path("a/../../x", str(tmp_path))
        assert exc_info.value.path == "a/../../x"

    def test_resolves_inner_parent_segments(self, tmp_path):
        assert validate_local_path("a/../x.png", str(tmp_path)) == "x.png"

    def test_dot_prefix_stays_inside(self, tmp_path):
        assert validate_local_path("./images/./a.png", str(tmp_path)) == os.path.join("images", "a.png")

    def test_collapses_separators(self, tmp_path):
        assert validate_local_path("images//a.png", str(tmp_path)) == os.path.join("images", "a.png")

    def test_double_dots_inside_a_name_are_not_traversal(self, tmp_path):
        assert validate_local_path("logo..png", str(tmp_path)) == "logo..png"

    def test_absolute_path_passes(self, tmp_path):
        assert validate_local_path("/etc/passwd", str(tmp_path)) == "/etc/passwd"

    def test_absolute_path_is_normalized(self, tmp_path):
        assert validate_local_path("/var/www/../lib//x.png", str(tmp_path)) == "/var/lib/x.png"

    def test_defaults_to_process_cwd(self, workdir):
        assert validate_local_path("a.png") == "a.png"

    def test_rejects_relative_path_resolving_outside_cwd(self, tmp_path):
        with patch("imguri.core.path_validator.is_within_directory", return_value=False):
            with pytest.raises(PathSecurityViolation, match="escapes cwd") as exc_info:
                validate_local_path("a.png", str(tmp_path))

        assert exc_info.value.path == "a.png"
        assert exc_info.value.resolved == os.path.join(str(tmp_path), "a.png")

    def test_absolute_path_skips_containment(self, tmp_path):
        with patch("imguri.core.path_validator.is_within_directory", return_value=False):
            assert validate_local_path("/var/lib/x.png", str(tmp_path)) == "/var/lib/x.png"


@pytest.mark.parametrize("base, path, expected", [
    ("/srv/app", "/srv/app", True),
    ("/srv/app", "/srv/app/images/a.png", True),
    ("/srv/app", "/srv/other/a.png", False),
    ("/srv/app", "/srv/application/a.png", False),
    ("/srv/app", "/srv", False),
])
def test_is_within_directory(base, path, expected):
    assert is_within_directory(base, path) is expected
