"""Query Plan nodes that load data

The datasource nodes fetch the data from some source,
convert it into Arrow format and forward it to the next
node in the plan.

Datasets are frequently published as CSV files on the web,
so :class:`CSVDataSource` accepts both local paths and
``http://`` or ``https://`` URLs.
"""

import urllib.error
import urllib.request
from abc import abstractmethod
from typing import Any

import pyarrow as pa
import pyarrow.csv

from ..utils.logs import get_logger
from .base import QueryPlanNode

logger = get_logger(__name__)


class DataSourceError(Exception):
    """The data source could not be read.

    :param location: The path or URL that failed to load.
    """

    def __init__(self, location: str, message: str) -> None:
        super().__init__(f"Unable to load {location}: {message}")
        self.location = location


class DataSourceNode(QueryPlanNode):
    """Base class for nodes that load data from a source."""

    @abstractmethod
    def poll_schema(self) -> pa.Schema:
        """Poll the schema of the data source without emitting its content."""
        ...


def is_url(location: str) -> bool:
    """Whether the location should be fetched over HTTP."""
    return location.startswith(("http://", "https://"))


class CSVDataSource(DataSourceNode):
    """Load data from a CSV file.

    Given a local CSV file path or the URL of a remote one,
    parse its content into Arrow format and emit it for the
    next nodes of the query plan to consume.

    Remote files are downloaded once and kept in memory,
    following calls to :meth:`batches` reuse the downloaded data.
    """

    def __init__(
        self, location: str, block_size: int | None = None, timeout: float = 30.0
    ) -> None:
        """
        :param location: The path of the local CSV file or its URL.
        :param block_size: How big to make batches of data,
                           Influences how many batches will be produced
        :param timeout: Seconds to wait for the remote server to answer.
        """
        self.location = location
        self.block_size = block_size
        self.timeout = timeout
        self._downloaded: pa.Buffer | None = None

    def __str__(self) -> str:
        return f"CSVDataSource({self.location}, block_size={self.block_size})"

    def batches(self) -> QueryPlanNode.RecordBatchesGenerator:
        """Open the CSV file and emit the batches.

        A file with only the header still emits one empty batch,
        so that the following nodes know its columns.
        """
        with self._open_csv(
            read_options=pa.csv.ReadOptions(block_size=self.block_size)
        ) as reader:
            emitted = False
            try:
                for batch in reader:
                    emitted = True
                    yield batch
            except pa.ArrowInvalid as e:
                raise DataSourceError(self.location, str(e)) from e
            if not emitted:
                yield pa.RecordBatch.from_pylist([], schema=reader.schema)

    def poll_schema(self) -> pa.Schema:
        """Poll the schema of the CSV file."""
        with self._open_csv() as reader:
            return reader.schema

    def _open_csv(self, **kwargs: Any) -> pa.csv.CSVStreamingReader:
        source: Any = self.location
        if is_url(self.location):
            source = pa.BufferReader(self._download())
        try:
            return pa.csv.open_csv(source, **kwargs)
        except (pa.ArrowInvalid, OSError) as e:
            raise DataSourceError(self.location, str(e)) from e

    def _download(self) -> pa.Buffer:
        if self._downloaded is None:
            logger.info(f"Fetching {self.location}")
            try:
                with urllib.request.urlopen(self.location, timeout=self.timeout) as resp:
                    self._downloaded = pa.py_buffer(resp.read())
            except urllib.error.URLError as e:
                raise DataSourceError(self.location, str(e.reason)) from e
            except OSError as e:
                # Timeouts while reading the body are not wrapped in URLError.
                raise DataSourceError(self.location, str(e) or type(e).__name__) from e
            logger.debug(f"Fetched {self._downloaded.size} bytes from {self.location}")
        return self._downloaded


class PyArrowTableDataSource(DataSourceNode):
    """Load data from an in-memory pyarrow.Table or pyarrow.RecordBatch."""

    def __init__(self, table: pa.Table | pa.RecordBatch) -> None:
        """
        :param table: The table or recordbatch with the data to read.
        """
        self.table = table

    def __str__(self) -> str:
        return f"PyArrowTableDataSource(columns={self.table.column_names}, rows={self.table.num_rows})"

    def batches(self) -> QueryPlanNode.RecordBatchesGenerator:
        """Emit the data contained in the Table for consumption by other nodes."""
        if isinstance(self.table, pa.RecordBatch):
            yield self.table
            return

        batches = self.table.to_batches()
        if not batches:
            # Tables without rows may have no chunks at all.
            batches = [pa.RecordBatch.from_pylist([], schema=self.table.schema)]
        yield from batches

    def poll_schema(self) -> pa.Schema:
        """Poll the schema of the Table."""
        return self.table.schema
