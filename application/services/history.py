import datetime
import math
from dataclasses import dataclass
from decimal import Decimal

from domain.models.currency import HistoricalRate


@dataclass(frozen=True)
class HistoryItem:
	date: datetime.date
	rates: dict[str, Decimal]


@dataclass(frozen=True)
class HistoryPage:
	base_currency: str
	items: list[HistoryItem]
	total_count: int
	page: int
	page_size: int

	@property
	def total_pages(self) -> int:
		return math.ceil(self.total_count / self.page_size)


def paginate_history(historical: HistoricalRate, page: int = 1, page_size: int = 10) -> HistoryPage:
	"""Chronologically ordered slice of a historical range."""
	items = [HistoryItem(date=day, rates=rates) for day, rates in historical.sorted_items()]
	offset = (page - 1) * page_size
	return HistoryPage(
		base_currency=historical.base,
		items=items[offset : offset + page_size],
		total_count=len(items),
		page=page,
		page_size=page_size,
	)
