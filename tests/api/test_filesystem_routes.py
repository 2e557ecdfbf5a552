"""Integration tests for the /fs endpoints.

Each test runs against a fresh in-memory filesystem with the default layout.
Failure responses carry ``error`` (the error kind), ``detail``, ``path`` and
``operation``, with 404 for missing entries or parents, 409 for conflicts
and 400 otherwise.
"""

from fastapi import status


def assert_fs_error(response, status_code, kind, operation, path=None):
    """Assert a filesystem error response has the expected shape."""
    assert response.status_code == status_code
    data = response.json()
    assert data["error"] == kind
    assert data["operation"] == operation
    assert data["detail"]
    if path is not None:
        assert data["path"] == path


# =============================================================================
# Queries
# =============================================================================


class TestListDirectory:
    def test_lists_home_by_default(self, test_client):
        response = test_client.get("/fs/list")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["path"] == "/home/user"
        assert [e["name"] for e in data["entries"]] == ["Desktop", "Documents", "Downloads"]
        assert data["total_count"] == 3
        assert all(e["kind"] == "directory" for e in data["entries"])

    def test_entries_describe_files(self, client_with_filesystem):
        client, filesystem = client_with_filesystem
        filesystem.write_file("/tmp/a.txt", "abc")

        entry = client.get("/fs/list", params={"path": "/tmp"}).json()["entries"][0]

        assert entry["name"] == "a.txt"
        assert entry["path"] == "/tmp/a.txt"
        assert entry["kind"] == "file"
        assert entry["size"] == 3
        assert entry["created_at"] is not None

    def test_hidden_entries(self, client_with_filesystem):
        client, filesystem = client_with_filesystem
        filesystem.touch("/tmp/.secret")

        assert client.get("/fs/list", params={"path": "/tmp"}).json()["entries"] == []
        hidden = client.get("/fs/list", params={"path": "/tmp", "show_hidden": True}).json()
        assert [e["name"] for e in hidden["entries"]] == [".secret"]

    def test_relative_path_uses_cwd(self, test_client):
        response = test_client.get("/fs/list", params={"path": "..", "cwd": "/var/log"})

        assert response.json()["path"] == "/var"
        assert [e["name"] for e in response.json()["entries"]] == ["log"]

    def test_tilde_cwd(self, client_with_filesystem):
        client, filesystem = client_with_filesystem
        filesystem.touch("/home/user/Documents/n.txt")

        response = client.get("/fs/list", params={"path": "Documents", "cwd": "~"})

        assert response.json()["path"] == "/home/user/Documents"

    def test_listing_a_file(self, client_with_filesystem):
        client, filesystem = client_with_filesystem
        filesystem.touch("/tmp/only.txt")

        data = client.get("/fs/list", params={"path": "/tmp/only.txt"}).json()

        assert data["total_count"] == 1
        assert data["entries"][0]["path"] == "/tmp/only.txt"

    def test_missing_directory(self, test_client):
        response = test_client.get("/fs/list", params={"path": "/nope"})
        assert_fs_error(response, 404, "no_such_entry", "list", "/nope")


class TestStat:
    def test_directory(self, test_client):
        data = test_client.get("/fs/stat", params={"path": "/"}).json()

        assert data["name"] == "/"
        assert data["kind"] == "directory"
        assert data["child_count"] == 4

    def test_missing(self, test_client):
        response = test_client.get("/fs/stat", params={"path": "ghost"})
        assert_fs_error(response, 404, "no_such_entry", "stat", "/home/user/ghost")

    def test_path_is_required(self, test_client):
        assert test_client.get("/fs/stat").status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestReadFile:
    def test_reads_content(self, client_with_filesystem):
        client, filesystem = client_with_filesystem
        filesystem.write_file("/tmp/r.txt", "line\n")

        data = client.get("/fs/read", params={"path": "/tmp/r.txt"}).json()

        assert data == {"path": "/tmp/r.txt", "content": "line\n", "size": 5}

    def test_directory_is_bad_request(self, test_client):
        response = test_client.get("/fs/read", params={"path": "/tmp"})
        assert_fs_error(response, 400, "is_a_directory", "read", "/tmp")


class TestSnapshot:
    def test_default_layout(self, test_client):
        data = test_client.get("/fs/snapshot").json()

        assert data["entry_count"] == 9
        assert data["total_bytes"] == 0
        assert data["entries"]["/"] == {
            "kind": "directory",
            "children": ["home", "etc", "var", "tmp"],
        }

    def test_reflects_writes(self, test_client):
        test_client.put("/fs/write", json={"path": "/tmp/a", "content": "12345"})

        data = test_client.get("/fs/snapshot").json()

        assert data["entries"]["/tmp/a"]["content"] == "12345"
        assert data["total_bytes"] == 5


# =============================================================================
# Mutations
# =============================================================================


class TestWriteFile:
    def test_creates_file(self, client_with_filesystem):
        client, filesystem = client_with_filesystem

        response = client.put("/fs/write", json={"path": "notes.txt", "content": "hi\n"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "operation": "write",
            "path": "/home/user/notes.txt",
            "message": "Wrote /home/user/notes.txt (3 characters)",
        }
        assert filesystem.read_file("/home/user/notes.txt").value == "hi\n"

    def test_append(self, client_with_filesystem):
        client, filesystem = client_with_filesystem
        filesystem.write_file("/tmp/log", "a\n")

        response = client.put("/fs/write", json={"path": "/tmp/log", "content": "b\n", "append": True})

        assert response.json()["message"].startswith("Appended to /tmp/log")
        assert filesystem.read_file("/tmp/log").value == "a\nb\n"

    def test_into_directory(self, test_client):
        response = test_client.put("/fs/write", json={"path": "/tmp", "content": "x"})
        assert_fs_error(response, 400, "is_a_directory", "write")

    def test_missing_parent(self, test_client):
        response = test_client.put("/fs/write", json={"path": "/no/where", "content": "x"})
        assert_fs_error(response, 404, "no_such_parent", "write", "/no/where")

    def test_empty_path_is_rejected(self, test_client):
        response = test_client.put("/fs/write", json={"path": "", "content": "x"})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestMakeDirectoryAndTouch:
    def test_mkdir(self, client_with_filesystem):
        client, filesystem = client_with_filesystem

        response = client.post("/fs/mkdir", json={"path": "projects", "cwd": "/tmp"})

        assert response.json()["path"] == "/tmp/projects"
        assert filesystem.is_directory("/tmp/projects")

    def test_mkdir_conflict(self, test_client):
        response = test_client.post("/fs/mkdir", json={"path": "/tmp"})
        assert_fs_error(response, 409, "already_exists", "mkdir", "/tmp")

    def test_mkdir_missing_parent(self, test_client):
        response = test_client.post("/fs/mkdir", json={"path": "/a/b"})
        assert_fs_error(response, 404, "no_such_parent", "mkdir")

    def test_touch_is_idempotent(self, client_with_filesystem):
        client, filesystem = client_with_filesystem
        filesystem.write_file("/tmp/keep", "data")

        response = client.post("/fs/touch", json={"path": "/tmp/keep"})

        assert response.status_code == status.HTTP_200_OK
        assert filesystem.read_file("/tmp/keep").value == "data"


class TestRemove:
    def test_remove_file(self, client_with_filesystem):
        client, filesystem = client_with_filesystem
        filesystem.touch("/tmp/x")

        response = client.delete("/fs/remove", params={"path": "/tmp/x"})

        assert response.json()["path"] == "/tmp/x"
        assert not filesystem.exists("/tmp/x")

    def test_directory_requires_recursive(self, client_with_filesystem):
        client, filesystem = client_with_filesystem

        response = client.delete("/fs/remove", params={"path": "/home/user/Documents"})
        assert_fs_error(response, 400, "is_a_directory", "remove")

        response = client.delete(
            "/fs/remove", params={"path": "/home/user/Documents", "recursive": True}
        )
        assert response.status_code == status.HTTP_200_OK
        assert not filesystem.exists("/home/user/Documents")

    def test_root_is_refused(self, test_client):
        response = test_client.delete("/fs/remove", params={"path": "/", "recursive": True})
        assert_fs_error(response, 400, "invalid_argument", "remove", "/")

    def test_missing(self, test_client):
        response = test_client.delete("/fs/remove", params={"path": "/ghost"})
        assert_fs_error(response, 404, "no_such_entry", "remove")


class TestCopyAndMove:
    def test_copy(self, client_with_filesystem):
        client, filesystem = client_with_filesystem
        filesystem.write_file("/tmp/a", "A")

        response = client.post("/fs/copy", json={"source": "a", "destination": "b", "cwd": "/tmp"})

        assert response.json()["path"] == "/tmp/b"
        assert filesystem.read_file("/tmp/a").value == "A"
        assert filesystem.read_file("/tmp/b").value == "A"

    def test_copy_directory_source(self, test_client):
        response = test_client.post("/fs/copy", json={"source": "/tmp", "destination": "/x"})
        assert_fs_error(response, 400, "is_a_directory", "copy", "/tmp")

    def test_copy_same_file(self, client_with_filesystem):
        client, filesystem = client_with_filesystem
        filesystem.touch("/tmp/a")

        response = client.post("/fs/copy", json={"source": "/tmp/a", "destination": "/tmp/./a"})
        assert_fs_error(response, 400, "invalid_argument", "copy")

    def test_move(self, client_with_filesystem):
        client, filesystem = client_with_filesystem
        filesystem.write_file("/tmp/a", "A")

        response = client.post("/fs/move", json={"source": "/tmp/a", "destination": "~/a"})

        assert response.json()["path"] == "/home/user/a"
        assert not filesystem.exists("/tmp/a")
        assert filesystem.read_file("/home/user/a").value == "A"

    def test_move_missing_source(self, test_client):
        response = test_client.post("/fs/move", json={"source": "/ghost", "destination": "/tmp/g"})
        assert_fs_error(response, 404, "no_such_entry", "move", "/ghost")


class TestReset:
    def test_restores_default_layout(self, client_with_filesystem):
        client, filesystem = client_with_filesystem
        filesystem.make_directory("/tmp/junk")

        response = client.post("/fs/reset")

        assert response.json()["operation"] == "reset"
        assert not filesystem.exists("/tmp/junk")
        assert filesystem.validate_state() == []
