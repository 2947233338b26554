"""Property-based tests for batch partitioning and sequential import."""

import math

import pytest
import structlog
from hypothesis import given, settings
from hypothesis import strategies as st

from cosense_sync.errors import ConfigurationError, PageImportError
from cosense_sync.models.page import Page, PageLine
from cosense_sync.sync.batch_importer import BatchImporter, partition
from cosense_sync.sync.models import BatchProgress

log = structlog.stdlib.get_logger()


def make_pages(count: int) -> list[Page]:
    return [
        Page(title=f"page-{i}", lines=[PageLine(text=f"page-{i}")], updated=1745842022 + i)
        for i in range(count)
    ]


class RecordingImport:
    """Import callable that records batches and can fail on a chosen call."""

    def __init__(self, fail_on: int | None = None):
        self.batches: list[list[Page]] = []
        self.fail_on = fail_on

    def __call__(self, batch: list[Page]) -> None:
        self.batches.append(batch)
        if self.fail_on is not None and len(self.batches) == self.fail_on:
            raise PageImportError("Import failed: 500 - boom", "destination")


class TestPartition:
    """Partitioning loses, duplicates and reorders nothing."""

    @given(
        items=st.lists(st.integers(), min_size=1, max_size=500),
        batch_size=st.integers(min_value=1, max_value=150),
    )
    @settings(max_examples=100)
    def test_partition_shape_and_concatenation(self, items: list[int], batch_size: int) -> None:
        log.info("test_partition_shape_and_concatenation", count=len(items), batch_size=batch_size)

        batches = partition(items, batch_size)

        assert len(batches) == math.ceil(len(items) / batch_size)
        assert all(1 <= len(batch) <= batch_size for batch in batches)
        assert all(len(batch) == batch_size for batch in batches[:-1])
        assert [item for batch in batches for item in batch] == items

    def test_partition_of_empty_list(self) -> None:
        assert partition([], 100) == []

    @pytest.mark.parametrize("batch_size", [0, -1])
    def test_non_positive_batch_size_is_configuration_error(self, batch_size: int) -> None:
        with pytest.raises(ConfigurationError):
            partition([1, 2, 3], batch_size)
        with pytest.raises(ConfigurationError):
            BatchImporter(batch_size=batch_size)


class TestImportInBatches:
    def test_250_pages_in_batches_of_100(self) -> None:
        pages = make_pages(250)
        sleeps: list[float] = []
        events: list[object] = []
        importer_call = RecordingImport()

        def record_import(batch: list[Page]) -> None:
            events.append(("import", len(batch)))
            importer_call(batch)

        def record_sleep(seconds: float) -> None:
            events.append(("sleep", seconds))
            sleeps.append(seconds)

        importer = BatchImporter(batch_size=100, delay_seconds=1.0, sleep=record_sleep)
        report = importer.import_in_batches(pages, record_import)

        assert [len(batch) for batch in importer_call.batches] == [100, 100, 50]
        assert [page for batch in importer_call.batches for page in batch] == pages
        assert events == [
            ("import", 100),
            ("sleep", 1.0),
            ("import", 100),
            ("sleep", 1.0),
            ("import", 50),
        ]
        assert report.total_pages == 250
        assert report.total_batches == 3
        assert report.batch_sizes == [100, 100, 50]

    def test_single_batch_does_not_sleep(self) -> None:
        sleeps: list[float] = []
        importer = BatchImporter(batch_size=100, sleep=sleeps.append)

        report = importer.import_in_batches(make_pages(1), RecordingImport())

        assert sleeps == []
        assert report.batch_sizes == [1]

    def test_empty_page_list_makes_no_calls(self) -> None:
        calls = RecordingImport()
        sleeps: list[float] = []

        report = BatchImporter(sleep=sleeps.append).import_in_batches([], calls)

        assert calls.batches == []
        assert sleeps == []
        assert report.total_batches == 0

    @given(
        page_count=st.integers(min_value=1, max_value=60),
        batch_size=st.integers(min_value=1, max_value=10),
        data=st.data(),
    )
    @settings(max_examples=50)
    def test_failure_stops_remaining_batches(
        self, page_count: int, batch_size: int, data: st.DataObject
    ) -> None:
        pages = make_pages(page_count)
        total = math.ceil(page_count / batch_size)
        fail_on = data.draw(st.integers(min_value=1, max_value=total))
        calls = RecordingImport(fail_on=fail_on)
        sleeps: list[float] = []

        importer = BatchImporter(batch_size=batch_size, sleep=sleeps.append)

        with pytest.raises(PageImportError) as exc_info:
            importer.import_in_batches(pages, calls)

        assert len(calls.batches) == fail_on
        assert len(sleeps) == fail_on - 1
        assert exc_info.value.batch_number == fail_on
        assert exc_info.value.total_batches == total
        assert f"batch {fail_on}/{total}" in str(exc_info.value)

    def test_progress_reported_per_batch(self) -> None:
        progress: list[BatchProgress] = []
        importer = BatchImporter(batch_size=2, sleep=lambda _: None, on_progress=progress.append)

        with pytest.raises(PageImportError):
            importer.import_in_batches(make_pages(5), RecordingImport(fail_on=2))

        assert [(p.batch_number, p.total_batches, p.page_count, p.succeeded) for p in progress] == [
            (1, 3, 2, True),
            (2, 3, 2, False),
        ]

    def test_unexpected_errors_propagate_unchanged(self) -> None:
        def broken(batch: list[Page]) -> None:
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError, match="bug"):
            BatchImporter(sleep=lambda _: None).import_in_batches(make_pages(3), broken)
