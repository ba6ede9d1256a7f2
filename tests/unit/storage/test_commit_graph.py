"""Unit tests for CommitGraph."""

import json
from pathlib import Path
from typing import List

import pytest

from rootvcs.errors import CommitNotFoundError, CorruptionError
from rootvcs.models import Commit, CommitStatus, StagingEntry
from rootvcs.storage.commit_graph import CommitGraph
from rootvcs.storage.hashing import hash_content
from rootvcs.storage.object_store import ObjectStore

TIMESTAMP = "2026-01-01T00:00:00+00:00"


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    root = tmp_path / ".root"
    root.mkdir()
    (root / "objects").mkdir()
    (root / "HEAD").write_text("")
    return root


@pytest.fixture
def store(repo_dir: Path) -> ObjectStore:
    return ObjectStore(repo_dir)


@pytest.fixture
def graph(repo_dir: Path, store: ObjectStore) -> CommitGraph:
    return CommitGraph(repo_dir, store)


def _entries(store: ObjectStore, **files: str) -> List[StagingEntry]:
    return [
        StagingEntry(path=path, digest=store.write(content.encode()))
        for path, content in files.items()
    ]


def _object_count(store: ObjectStore) -> int:
    return sum(1 for p in store.objects_dir.rglob("*") if p.is_file())


class TestHead:
    """Test reading HEAD."""

    def test_empty_head(self, graph: CommitGraph) -> None:
        assert graph.head() is None

    def test_missing_head_file(self, graph: CommitGraph) -> None:
        graph.head_path.unlink()
        assert graph.head() is None

    def test_whitespace_head(self, graph: CommitGraph) -> None:
        graph.head_path.write_text(" ")
        assert graph.head() is None

    def test_garbage_head(self, graph: CommitGraph) -> None:
        graph.head_path.write_text("not a digest")
        with pytest.raises(CorruptionError):
            graph.head()

    def test_non_utf8_head(self, graph: CommitGraph) -> None:
        graph.head_path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(CorruptionError, match="UTF-8"):
            graph.head()


class TestAppend:
    """Test commit creation."""

    def test_first_commit(self, graph: CommitGraph, store: ObjectStore) -> None:
        entries = _entries(store, **{"a.txt": "hello"})

        result = graph.append("first", entries, None)

        assert result.status is CommitStatus.CREATED
        assert result.created
        assert graph.head() == result.digest

        commit = graph.read(result.digest)
        assert commit.message == "first"
        assert commit.parent is None
        assert list(commit.files) == entries

    def test_digest_is_hash_of_serialized_record(
        self, graph: CommitGraph, store: ObjectStore
    ) -> None:
        entries = _entries(store, **{"a.txt": "hello"})
        result = graph.append("first", entries, None, timestamp=TIMESTAMP)

        expected = Commit(timestamp=TIMESTAMP, message="first", files=tuple(entries))
        assert result.digest == hash_content(expected.serialize())

    def test_serialized_key_order(self, graph: CommitGraph, store: ObjectStore) -> None:
        entries = _entries(store, **{"a.txt": "hello"})
        result = graph.append("first", entries, None, timestamp=TIMESTAMP)

        record = json.loads(store.get(result.digest))
        assert list(record.keys()) == ["timestamp", "message", "files", "parent"]
        assert list(record["files"][0].keys()) == ["path", "hash"]

    def test_identical_records_share_digest(self, tmp_path: Path) -> None:
        digests = []
        for name in ("one", "two"):
            root = tmp_path / name / ".root"
            root.mkdir(parents=True)
            store = ObjectStore(root)
            graph = CommitGraph(root, store)
            entries = _entries(store, **{"a.txt": "hello"})
            digests.append(graph.append("same", entries, None, timestamp=TIMESTAMP).digest)

        assert digests[0] == digests[1]

    def test_commit_links_parent(self, graph: CommitGraph, store: ObjectStore) -> None:
        first = graph.append("first", _entries(store, **{"a.txt": "v1"}), None)
        second = graph.append("second", _entries(store, **{"a.txt": "v2"}), graph.head())

        assert graph.head() == second.digest
        assert graph.read(second.digest).parent == first.digest

    def test_empty_entries_rejected(self, graph: CommitGraph, store: ObjectStore) -> None:
        result = graph.append("empty", [], None)

        assert result.status is CommitStatus.NOTHING_STAGED
        assert graph.head() is None
        assert _object_count(store) == 0

    def test_unchanged_files_suppressed(self, graph: CommitGraph, store: ObjectStore) -> None:
        entries = _entries(store, **{"a.txt": "hello"})
        first = graph.append("first", entries, None)
        objects_before = _object_count(store)

        result = graph.append("second", list(entries), graph.head())

        assert result.status is CommitStatus.UNCHANGED
        assert not result.created
        assert graph.head() == first.digest
        assert _object_count(store) == objects_before

    def test_reordered_files_are_a_change(
        self, graph: CommitGraph, store: ObjectStore
    ) -> None:
        entries = _entries(store, **{"a.txt": "a", "b.txt": "b"})
        graph.append("first", entries, None)

        result = graph.append("second", list(reversed(entries)), graph.head())

        assert result.status is CommitStatus.CREATED

    def test_missing_parent(self, graph: CommitGraph, store: ObjectStore) -> None:
        entries = _entries(store, **{"a.txt": "hello"})
        with pytest.raises(CorruptionError, match="missing"):
            graph.append("orphan", entries, hash_content(b"no such commit"))
        assert graph.head() is None


class TestHistory:
    """Test history traversal."""

    def test_empty_history(self, graph: CommitGraph) -> None:
        assert list(graph.iter_history()) == []

    def test_history_order(self, graph: CommitGraph, store: ObjectStore) -> None:
        digests = []
        for i in range(5):
            result = graph.append(
                f"commit {i}", _entries(store, **{"a.txt": f"v{i}"}), graph.head()
            )
            digests.append(result.digest)

        history = list(graph.iter_history())

        assert [digest for digest, _ in history] == list(reversed(digests))
        assert [commit.message for _, commit in history][0] == "commit 4"
        assert history[-1][1].parent is None

    def test_history_is_restartable(self, graph: CommitGraph, store: ObjectStore) -> None:
        graph.append("first", _entries(store, **{"a.txt": "v1"}), None)
        assert len(list(graph.iter_history())) == 1

        graph.append("second", _entries(store, **{"a.txt": "v2"}), graph.head())
        assert len(list(graph.iter_history())) == 2

    def test_missing_link_raises(self, graph: CommitGraph, store: ObjectStore) -> None:
        first = graph.append("first", _entries(store, **{"a.txt": "v1"}), None)
        graph.append("second", _entries(store, **{"a.txt": "v2"}), graph.head())

        (store.objects_dir / first.digest[:2] / first.digest[2:]).unlink()

        walker = graph.iter_history()
        _, newest = next(walker)
        assert newest.message == "second"
        with pytest.raises(CorruptionError, match="missing"):
            next(walker)

    def test_dangling_head_raises(self, graph: CommitGraph) -> None:
        graph.head_path.write_text(hash_content(b"gone"))
        with pytest.raises(CorruptionError):
            list(graph.iter_history())

    def test_read_non_commit_object(self, graph: CommitGraph, store: ObjectStore) -> None:
        digest = store.write(b"just a blob")
        with pytest.raises(CorruptionError):
            graph.read(digest)

    def test_read_missing_commit(self, graph: CommitGraph) -> None:
        with pytest.raises(CommitNotFoundError):
            graph.read(hash_content(b"never committed"))

    def test_read_linked_missing_commit(self, graph: CommitGraph) -> None:
        with pytest.raises(CorruptionError) as exc_info:
            graph.read_linked(hash_content(b"never committed"))
        assert isinstance(exc_info.value.__cause__, CommitNotFoundError)
