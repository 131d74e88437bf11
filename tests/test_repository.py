"""Tests for repository configuration."""

import pytest

from filetransport.repository import InputData, Repository, Resource, basedir_from_url


class TestBasedirFromUrl:
    """Test base directory extraction from repository URLs."""

    def test_file_url(self):
        assert basedir_from_url("file:///tmp/repo") == "/tmp/repo"

    def test_localhost(self):
        assert basedir_from_url("file://localhost/tmp/repo") == "/tmp/repo"

    def test_escaped_characters(self):
        assert basedir_from_url("file:///tmp/my%20repo") == "/tmp/my repo"

    def test_windows_drive_url(self):
        assert basedir_from_url("file:///C:/repo") == "C:/repo"

    def test_unc_host(self):
        assert basedir_from_url("file://server/share/repo") == "//server/share/repo"

    def test_relative_file_url(self):
        assert basedir_from_url("file:target/repo") == "target/repo"

    def test_root(self):
        assert basedir_from_url("file://") == "/"

    def test_plain_paths(self):
        """Test paths without a scheme are used as-is."""
        assert basedir_from_url("/srv/repo") == "/srv/repo"
        assert basedir_from_url("target/repo") == "target/repo"
        assert basedir_from_url("C:\\repo") == "C:\\repo"

    def test_unsupported_scheme(self):
        with pytest.raises(ValueError, match="Unsupported repository URL scheme 'sftp'"):
            basedir_from_url("sftp://host/repo")


class TestRepository:
    """Test repository and resource descriptors."""

    def test_from_url(self):
        repository = Repository.from_url("file:///tmp/repo", id="local")

        assert repository.base_directory == "/tmp/repo"
        assert repository.id == "local"
        assert repository.url == "file:///tmp/repo"

    def test_resource_defaults(self):
        resource = Resource("a/b.txt")

        assert resource.content_length == -1
        assert resource.last_modified == 0

    def test_input_data_starts_empty(self):
        assert InputData(Resource("a")).input_stream is None
