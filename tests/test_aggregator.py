import tempfile
import unittest
from datetime import timezone
from pathlib import Path

from wrapped.aggregator import aggregate, find_jsonl_files
from wrapped.models import SourceDirectory

from fixtures import assistant_record, summary_record, text_block, user_record, write_jsonl

UTC = timezone.utc


def source(path: Path, name: str) -> SourceDirectory:
    return SourceDirectory(path=str(path), project_name=name)


class FindJsonlFilesTests(unittest.TestCase):
    def test_walks_sorted_and_skips_hidden_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_jsonl(root / "projects" / "b" / "two.jsonl", [])
            write_jsonl(root / "projects" / "a" / "one.jsonl", [])
            write_jsonl(root / ".cache" / "hidden.jsonl", [])
            (root / "notes.txt").write_text("not a log")

            files = find_jsonl_files(root)

            self.assertEqual(
                [f.relative_to(root).as_posix() for f in files],
                ["projects/a/one.jsonl", "projects/b/two.jsonl"],
            )

    def test_missing_directory_is_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            self.assertEqual(find_jsonl_files(Path(tmpdir) / "nope"), [])


class AggregateTests(unittest.TestCase):
    def test_merges_directories_and_sorts_by_timestamp(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            first = Path(tmpdir) / "first"
            second = Path(tmpdir) / "second"
            write_jsonl(first / "s.jsonl", [
                user_record("u2", "2025-05-02T10:00:00Z", "second prompt"),
                assistant_record("a2", "2025-05-02T10:00:05Z", [text_block("ok")]),
                summary_record("First project"),
            ])
            write_jsonl(second / "s.jsonl", [
                user_record("u1", "2025-05-01T10:00:00Z", "first prompt"),
                assistant_record("a1", "2025-05-01T10:00:05Z", [text_block("ok")]),
            ])

            dataset = aggregate([source(first, "first"), source(second, "second")], tz=UTC)

        self.assertEqual([e.uuid for e in dataset.user_entries], ["u1", "u2"])
        self.assertEqual([e.uuid for e in dataset.assistant_entries], ["a1", "a2"])
        self.assertEqual([s.summary for s in dataset.summaries], ["First project"])
        self.assertEqual(dataset.total_files, 2)
        self.assertEqual(len(dataset.directories), 2)

    def test_duplicate_uuid_keeps_first_enumerated_occurrence(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            first = Path(tmpdir) / "first"
            second = Path(tmpdir) / "second"
            write_jsonl(first / "a.jsonl", [user_record("abc", "2025-05-01T10:00:00Z", "from first")])
            write_jsonl(first / "b.jsonl", [user_record("abc", "2025-04-01T10:00:00Z", "from first, file b")])
            write_jsonl(second / "a.jsonl", [user_record("abc", "2025-03-01T10:00:00Z", "from second")])

            dataset = aggregate([source(first, "first"), source(second, "second")], tz=UTC)

        self.assertEqual(len(dataset.user_entries), 1)
        self.assertEqual(dataset.user_entries[0].content, "from first")

    def test_summaries_are_never_deduplicated(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_jsonl(root / "a.jsonl", [summary_record("Same", "x"), summary_record("Same", "x")])

            dataset = aggregate([source(root, "root")], tz=UTC)

        self.assertEqual(len(dataset.summaries), 2)

    def test_equal_timestamps_keep_enumeration_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_jsonl(root / "a.jsonl", [
                user_record("late", "2025-05-01T11:00:00Z", "late"),
                user_record("tie-1", "2025-05-01T10:00:00Z", "tie one"),
            ])
            write_jsonl(root / "b.jsonl", [user_record("tie-2", "2025-05-01T10:00:00Z", "tie two")])

            dataset = aggregate([source(root, "root")], tz=UTC)

        self.assertEqual([e.uuid for e in dataset.user_entries], ["tie-1", "tie-2", "late"])

    def test_aggregation_is_idempotent(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_jsonl(root / "p1" / "a.jsonl", [
                user_record("u1", "2025-05-03T10:00:00Z", "one"),
                user_record("u2", "2025-05-01T10:00:00Z", "two"),
            ])
            write_jsonl(root / "p2" / "a.jsonl", [
                user_record("u2", "2025-05-02T10:00:00Z", "dupe"),
                user_record("u3", "2025-05-02T10:00:00Z", "three"),
            ])
            dirs = [source(root, "root")]

            first = aggregate(dirs, tz=UTC)
            second = aggregate(dirs, tz=UTC)

        self.assertEqual(first.user_entries, second.user_entries)
        self.assertEqual(first.assistant_entries, second.assistant_entries)

    def test_progress_callback_receives_milestones(self) -> None:
        messages = []
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_jsonl(root / "a.jsonl", [user_record("u1", "2025-05-01T10:00:00Z", "hello")])

            aggregate([source(root, "My Project")], on_progress=messages.append, tz=UTC)

        self.assertEqual(messages[0], "Scanning My Project...")
        self.assertEqual(messages[1], "  Found 1 conversation files")
        self.assertEqual(messages[-1], "Collected 1 prompts and 0 responses")

    def test_history_file_only_merged_when_requested(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_jsonl(root / "projects" / "a.jsonl", [user_record("u1", "2025-05-01T10:00:00Z", "hello")])
            write_jsonl(root / "history.jsonl", [{"display": "from history", "timestamp": 1740787200000}])
            dirs = [source(root, "root")]

            without = aggregate(dirs, tz=UTC)
            with_history = aggregate(dirs, tz=UTC, include_history=True)

        self.assertEqual(without.total_files, 1)
        self.assertEqual([e.content for e in without.user_entries], ["hello"])
        self.assertEqual(with_history.total_files, 1)
        self.assertEqual([e.content for e in with_history.user_entries], ["from history", "hello"])

    def test_unreadable_directory_contributes_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            dataset = aggregate([source(Path(tmpdir) / "missing", "missing")], tz=UTC)

        self.assertEqual(dataset.user_entries, [])
        self.assertEqual(dataset.total_files, 0)


if __name__ == "__main__":
    unittest.main()
