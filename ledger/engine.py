"""Ledger engine: owner-scoped queries, aggregation and item mutations.

Every operation takes the acting ``owner_id`` explicitly. Lookups by id are a
single query on ``(id, owner)``, and a miss is always ``NotFound`` whether the
item does not exist or belongs to someone else.
"""
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ledger import messages, store
from ledger.errors import NotFound, ValidationError
from ledger.filters import ItemFilter
from models import Item, ItemType

logger = logging.getLogger(__name__)

# Upper bound of the BIGINT amount column
MAX_AMOUNT = 2 ** 63 - 1
MAX_EVENT_LENGTH = 100

_AMOUNT_RE = re.compile(r'^\+?\d+$')


@dataclass(frozen=True)
class Summary:
    total_income: int = 0
    total_expense: int = 0
    balance: int = 0

    def to_dict(self):
        return {
            'totalIncome': self.total_income,
            'totalExpense': self.total_expense,
            'balance': self.balance,
        }


@dataclass(frozen=True)
class ItemFields:
    amount: int
    type: str
    event: str
    memo: Optional[str]


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_amount(value) -> int:
    if isinstance(value, bool):
        raise ValidationError(messages.ITEM_INVALID_AMOUNT)
    if isinstance(value, int):
        amount = value
    else:
        text = str(value).strip()
        if not _AMOUNT_RE.match(text):
            raise ValidationError(messages.ITEM_INVALID_AMOUNT)
        amount = int(text)
    if amount <= 0 or amount > MAX_AMOUNT:
        raise ValidationError(messages.ITEM_INVALID_AMOUNT)
    return amount


def validate_item_fields(amount, item_type, event, memo=None) -> ItemFields:
    """Check raw form values and return them normalised.

    Raises ValidationError on the first problem found: missing field, then
    unknown type, then an amount that is not a positive integer.
    """
    if _is_blank(amount) or _is_blank(item_type) or _is_blank(event):
        raise ValidationError(messages.ITEM_REQUIRED_FIELDS)
    if item_type not in ItemType.values():
        raise ValidationError(messages.ITEM_INVALID_TYPE)
    parsed_amount = _parse_amount(amount)
    event = event.strip()
    if len(event) > MAX_EVENT_LENGTH:
        raise ValidationError(messages.ITEM_EVENT_TOO_LONG)
    memo = memo.strip() if isinstance(memo, str) else memo
    return ItemFields(
        amount=parsed_amount,
        type=ItemType(item_type).value,
        event=event,
        memo=memo or None,
    )


# ---------------------- Queries ----------------------
def build_clauses(filters: ItemFilter) -> list:
    """Filter clauses layered on top of the unconditional owner clause."""
    clauses = []
    if filters.item_type is not None:
        clauses.append(Item.type == filters.item_type)
    if filters.start_at is not None:
        clauses.append(Item.created_at >= filters.start_at)
    if filters.end_at is not None:
        clauses.append(Item.created_at <= filters.end_at)
    return clauses


def list_items(owner_id, filters: Optional[ItemFilter] = None) -> List[Item]:
    filters = filters or ItemFilter()
    return store.find_items(owner_id, build_clauses(filters))


def summarize(items: Iterable[Item]) -> Summary:
    total_income = 0
    total_expense = 0
    for item in items:
        if item.type == ItemType.INCOME.value:
            total_income += item.amount
        elif item.type == ItemType.EXPENSE.value:
            total_expense += item.amount
    return Summary(total_income, total_expense, total_income - total_expense)


def get_item(owner_id, item_id) -> Item:
    item = store.find_item(item_id, owner_id)
    if item is None:
        logger.info('Item %s not found for user %s', item_id, owner_id)
        raise NotFound()
    return item


# ---------------------- Mutations ----------------------
def create_item(owner_id, amount, item_type, event, memo=None) -> int:
    fields = validate_item_fields(amount, item_type, event, memo)
    item = store.create_item(
        user_id=owner_id,
        amount=fields.amount,
        type=fields.type,
        event=fields.event,
        memo=fields.memo,
    )
    logger.info('User %s created item %s', owner_id, item.id)
    return item.id


def update_item(owner_id, item_id, amount, item_type, event, memo=None) -> Item:
    item = get_item(owner_id, item_id)
    fields = validate_item_fields(amount, item_type, event, memo)
    # created_at is never part of an update
    store.update_item(
        item,
        amount=fields.amount,
        type=fields.type,
        event=fields.event,
        memo=fields.memo,
    )
    logger.info('User %s updated item %s', owner_id, item_id)
    return item


def delete_item(owner_id, item_id) -> None:
    item = get_item(owner_id, item_id)
    store.delete_item(item)
    logger.info('User %s deleted item %s', owner_id, item_id)
