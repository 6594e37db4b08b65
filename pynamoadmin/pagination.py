from typing import Callable, Iterator, List, Optional, Tuple

Page = Tuple[List[str], Optional[str]]


class TablePageIterator(Iterator[Page]):
    """
    TablePageIterator handles ListTables pagination.

    Each page is a ``(table_names, last_evaluated_table_name)`` pair; the
    cursor of one page is sent as the exclusive start of the next, until a
    page comes back without one.

    http://docs.aws.amazon.com/amazondynamodb/latest/APIReference/API_ListTables.html
    """
    def __init__(
        self,
        operation: Callable[..., Page],
        exclusive_start_table_name: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> None:
        self._operation = operation
        self._first_iteration = True
        self._last_evaluated_table_name = exclusive_start_table_name
        self._limit = limit
        self._page_count = 0

    def __iter__(self) -> Iterator[Page]:
        return self

    def __next__(self) -> Page:
        if not self._last_evaluated_table_name and not self._first_iteration:
            raise StopIteration()

        self._first_iteration = False

        page = self._operation(
            exclusive_start_table_name=self._last_evaluated_table_name,
            limit=self._limit,
        )
        self._last_evaluated_table_name = page[1]
        self._page_count += 1
        return page

    def next(self) -> Page:
        return self.__next__()

    @property
    def last_evaluated_table_name(self) -> Optional[str]:
        return self._last_evaluated_table_name

    @property
    def page_count(self) -> int:
        return self._page_count


class TableNameIterator(Iterator[str]):
    """
    TableNameIterator yields table names across ListTables pages, in the order the service returns them.

    It is finite and not restartable. A failure on any page stops the
    iteration by raising; names already yielded stay yielded.
    """
    def __init__(
        self,
        operation: Callable[..., Page],
        exclusive_start_table_name: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> None:
        self.page_iter = TablePageIterator(operation, exclusive_start_table_name, limit)
        self._names: List[str] = []
        self._index = 0
        self._total_count = 0

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        # Empty pages are skipped, a page without a cursor ends the loop
        while self._index == len(self._names):
            self._names = next(self.page_iter)[0]
            self._index = 0
            self._total_count += len(self._names)

        name = self._names[self._index]
        self._index += 1
        return name

    def next(self) -> str:
        return self.__next__()

    @property
    def last_evaluated_table_name(self) -> Optional[str]:
        return self.page_iter.last_evaluated_table_name

    @property
    def total_count(self) -> int:
        return self._total_count
