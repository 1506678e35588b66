import enum
from datetime import datetime

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


class ItemType(str, enum.Enum):
    INCOME = 'Income'
    EXPENSE = 'Expense'

    @classmethod
    def values(cls):
        return tuple(member.value for member in cls)


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)
    items = db.relationship('Item', backref='user', lazy=True, cascade="all, delete-orphan")


class Item(db.Model):
    __table_args__ = (
        db.CheckConstraint('amount > 0', name='ck_item_amount_positive'),
        db.CheckConstraint("type IN ('Income', 'Expense')", name='ck_item_type'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    amount = db.Column(db.BigInteger, nullable=False)  # smallest currency unit, always positive
    type = db.Column(db.String(20), nullable=False)  # 'Income' or 'Expense'
    event = db.Column(db.String(100), nullable=False)
    memo = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now, index=True)

    @property
    def is_income(self):
        return self.type == ItemType.INCOME.value

    def to_dict(self):
        return {
            'id': self.id,
            'amount': self.amount,
            'type': self.type,
            'event': self.event,
            'memo': self.memo or '',
            'createdAt': self.created_at.isoformat(),
        }
