"""
Tests for the sharded hash database and the build/check walks.
"""
import os
import pytest
from brahe.core.database import (
    DatabaseBuilderImpl, DatabaseCheckerImpl, DatabaseWalkerBase, HashDatabase)
from brahe.core.errors import DatabaseError, FileOperationError
from brahe.core.hasher import hash_file
from brahe.core.models import DATABASE_DIR_NAME, Mode

DIGEST = bytes.fromhex("ab" + "cd" * 31)


@pytest.fixture
def database(temp_dir) -> HashDatabase:
    db = HashDatabase.under(str(temp_dir))
    db.initialize()
    return db


class TestHashDatabaseStore:
    """Storage layout and idempotence."""

    def test_under_uses_fixed_directory_name(self, temp_dir):
        assert HashDatabase.under(str(temp_dir)).root == str(temp_dir / DATABASE_DIR_NAME)

    def test_initialize_is_idempotent(self, temp_dir):
        db = HashDatabase.under(str(temp_dir))
        db.initialize()
        db.initialize()
        assert (temp_dir / DATABASE_DIR_NAME).is_dir()

    def test_initialize_fails_when_path_is_a_file(self, temp_dir):
        (temp_dir / DATABASE_DIR_NAME).write_text("not a dir")
        with pytest.raises(DatabaseError):
            HashDatabase.under(str(temp_dir)).initialize()

    def test_verify_exists_requires_prior_build(self, temp_dir):
        with pytest.raises(DatabaseError, match="Build it first"):
            HashDatabase.under(str(temp_dir)).verify_exists()

    def test_verify_exists_rejects_file(self, temp_dir):
        (temp_dir / DATABASE_DIR_NAME).write_text("oops")
        with pytest.raises(DatabaseError, match="not a directory"):
            HashDatabase.under(str(temp_dir)).verify_exists()

    def test_entry_is_sharded_by_first_byte(self, database):
        database.record_entry(DIGEST, "/data/a.txt")

        entry = os.path.join(database.root, "ab", "cd" * 31)
        assert os.path.isfile(entry)
        with open(entry, encoding="utf-8") as f:
            assert f.read() == "/data/a.txt\n"

    def test_record_twice_writes_no_new_bytes(self, database):
        assert database.record_entry(DIGEST, "/data/a.txt") is True
        entry = database.entry_path(DIGEST)
        with open(entry, "rb") as f:
            first = f.read()

        assert database.record_entry(DIGEST, "/data/a.txt") is False
        with open(entry, "rb") as f:
            assert f.read() == first

    def test_distinct_paths_share_an_entry(self, database):
        database.record_entry(DIGEST, "/data/a.txt")
        database.record_entry(DIGEST, "/backup/a.txt")

        assert database.read_entry(DIGEST) == ["/data/a.txt", "/backup/a.txt"]

    def test_has_entry(self, database):
        assert database.has_entry(DIGEST) is False
        database.record_entry(DIGEST, "/data/a.txt")
        assert database.has_entry(DIGEST) is True

    def test_read_missing_entry_is_empty(self, database):
        assert database.read_entry(DIGEST) == []


class TestBuildAndCheck:
    """End-to-end walks over real trees."""

    def test_walker_base_requires_process_file(self, make_tree, make_config, tracker, database):
        src = make_tree("src", {})
        config = make_config(src, mode=Mode.DEDUPE)

        with pytest.raises(TypeError):
            DatabaseWalkerBase(config, tracker, database)

    def test_build_records_every_file(self, make_tree, make_config, tracker, reports):
        src = make_tree("src", {"a.txt": "A", "d": {"b.txt": "B", "c.txt": "A"}, "Thumbs.db": "t"})
        host = make_tree("host", {})
        config = make_config(src, host, mode=Mode.BUILD_DATABASE)
        db = HashDatabase.under(str(host))
        db.initialize()

        DatabaseBuilderImpl(config, tracker, db, reports.append).build(100.0, str(src), -1)

        state = tracker.snapshot()
        assert state.copied == 3
        assert state.matched == 0
        assert state.ignored == 1
        assert state.percent_complete == pytest.approx(100.0)
        digest_a = hash_file(str(src / "a.txt")).digest
        assert sorted(db.read_entry(digest_a)) == sorted([str(src / "a.txt"), str(src / "d" / "c.txt")])

    def test_rebuild_counts_readds_as_matched(self, make_tree, make_config, reports):
        from brahe.core.progress import ProgressTracker
        src = make_tree("src", {"a.txt": "A", "b.txt": "B"})
        host = make_tree("host", {})
        config = make_config(src, host, mode=Mode.BUILD_DATABASE)
        db = HashDatabase.under(str(host))
        db.initialize()

        DatabaseBuilderImpl(config, ProgressTracker(), db).build(100.0, str(src), -1)
        snapshot_before = {p: p.read_bytes() for p in (host / DATABASE_DIR_NAME).rglob("*") if p.is_file()}

        second = ProgressTracker()
        DatabaseBuilderImpl(config, second, db).build(100.0, str(src), -1)

        assert second.snapshot().matched == 2
        assert second.snapshot().copied == 0
        snapshot_after = {p: p.read_bytes() for p in (host / DATABASE_DIR_NAME).rglob("*") if p.is_file()}
        assert snapshot_after == snapshot_before

    def test_build_records_undecodable_file_names(
            self, make_tree, make_config, tracker, reports, make_undecodable_file):
        src = make_tree("src", {})
        host = make_tree("host", {})
        path = make_undecodable_file(src, b"\xff.bin", b"raw name")
        config = make_config(src, host, mode=Mode.BUILD_DATABASE)
        db = HashDatabase.under(str(host))
        db.initialize()

        DatabaseBuilderImpl(config, tracker, db, reports.append).build(100.0, str(src), -1)

        digest = hash_file(path).digest
        assert tracker.snapshot().copied == 1
        assert db.read_entry(digest) == [path]
        with open(db.entry_path(digest), "rb") as f:
            assert f.read() == os.fsencode(path) + b"\n"

        assert db.record_entry(digest, path) is False

    def test_check_reports_files_not_in_database(self, make_tree, make_config, tracker, reports):
        src = make_tree("src", {"a.txt": "A"})
        tgt = make_tree("tgt", {"renamed.txt": "A", "sub": {"new.txt": "N"}})
        db = HashDatabase.under(str(src))
        db.initialize()
        db.record_entry(hash_file(str(src / "a.txt")).digest, str(src / "a.txt"))
        config = make_config(src, tgt, mode=Mode.CHECK_DATABASE)

        DatabaseCheckerImpl(config, tracker, db, reports.append).check(100.0, str(tgt), -1)

        state = tracker.snapshot()
        assert state.matched == 1
        assert state.missing == 1
        assert reports == [f"Not in database: {tgt / 'sub' / 'new.txt'}"]

    def test_check_copies_missing_files_to_relative_location(
            self, make_tree, make_config, tracker, reports, temp_dir):
        src = make_tree("src", {"a.txt": "A"})
        tgt = make_tree("tgt", {"a.txt": "A", "sub": {"deeper": {"new.txt": "N"}}})
        dest = temp_dir / "incoming"
        db = HashDatabase.under(str(src))
        db.initialize()
        db.record_entry(hash_file(str(src / "a.txt")).digest, str(src / "a.txt"))
        config = make_config(src, tgt, mode=Mode.CHECK_DATABASE, copy_destination=str(dest))

        DatabaseCheckerImpl(config, tracker, db, reports.append).check(100.0, str(tgt), -1)

        copied = dest / "sub" / "deeper" / "new.txt"
        assert copied.read_text() == "N"
        assert not (dest / "a.txt").exists()
        state = tracker.snapshot()
        assert state.copied == 1
        assert state.matched == 1
        assert state.missing == 0
        assert reports == []

    def test_copy_refuses_to_overwrite(self, make_tree, make_config, tracker, temp_dir):
        src = make_tree("src", {})
        tgt = make_tree("tgt", {"new.txt": "N"})
        dest = make_tree("incoming", {"new.txt": "already here"})
        db = HashDatabase.under(str(src))
        db.initialize()
        config = make_config(src, tgt, mode=Mode.CHECK_DATABASE, copy_destination=str(dest))

        with pytest.raises(FileOperationError):
            DatabaseCheckerImpl(config, tracker, db).check(100.0, str(tgt), -1)
        assert (dest / "new.txt").read_text() == "already here"

    def test_relative_path_uses_deepest_containing_entry(self, make_tree, make_config, tracker):
        src = make_tree("src", {})
        outer = make_tree("outer", {"inner": {}})
        inner = outer / "inner"
        config = make_config(src, outer, inner, mode=Mode.CHECK_DATABASE)
        checker = DatabaseCheckerImpl(config, tracker, HashDatabase.under(str(src)))

        assert checker.relative_path(str(inner / "x" / "f.txt")) == os.path.join("x", "f.txt")
        assert checker.relative_path(str(outer / "g.txt")) == "g.txt"
