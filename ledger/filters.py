from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Mapping, Optional

from ledger import messages
from ledger.errors import ValidationError
from models import ItemType

ALL_TYPES = 'all'

# 23:59:59.999, the last instant of a day the end-date bound covers
END_OF_DAY = time(23, 59, 59, 999000)


def _parse_date(value: Optional[str]) -> Optional[date]:
    if value is None or not value.strip():
        return None
    try:
        return datetime.strptime(value.strip(), '%Y-%m-%d').date()
    except ValueError:
        raise ValidationError(messages.FILTER_INVALID_DATE) from None


@dataclass(frozen=True)
class ItemFilter:
    """Validated list filter built from free-form query parameters."""

    type: str = ALL_TYPES
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> 'ItemFilter':
        item_type = (args.get('type') or '').strip() or ALL_TYPES
        if item_type != ALL_TYPES and item_type not in ItemType.values():
            raise ValidationError(messages.FILTER_INVALID_TYPE)
        return cls(
            type=item_type,
            start_date=_parse_date(args.get('startDate')),
            end_date=_parse_date(args.get('endDate')),
        )

    @property
    def item_type(self) -> Optional[str]:
        """The type to match on, or None for the ``all`` wildcard."""
        return None if self.type == ALL_TYPES else self.type

    @property
    def start_at(self) -> Optional[datetime]:
        if self.start_date is None:
            return None
        return datetime.combine(self.start_date, time.min)

    @property
    def end_at(self) -> Optional[datetime]:
        if self.end_date is None:
            return None
        return datetime.combine(self.end_date, END_OF_DAY)

    def to_params(self) -> dict:
        return {
            'type': self.type,
            'startDate': self.start_date.isoformat() if self.start_date else '',
            'endDate': self.end_date.isoformat() if self.end_date else '',
        }
