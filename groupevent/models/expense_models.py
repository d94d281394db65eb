#!/usr/bin/env python3
"""
Expense Data Models
Data classes for group expenses and the balances derived from them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ExpenseParticipant:
    """A member's part in an expense, either as payer or as ower."""
    member_device_id: str
    role: str  # 'payer' or 'ower'
    individual_amount: float
    payment_status: str = 'pending'  # 'pending', 'sent' or 'completed'

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExpenseParticipant':
        """Create from dictionary."""
        return cls(
            member_device_id=data['member_device_id'],
            role=data['role'],
            individual_amount=float(data['individual_amount']),
            payment_status=data.get('payment_status', 'pending')
        )


@dataclass
class Expense:
    """A shared group expense."""
    id: str
    group_id: str
    description: str
    total_amount: float
    created_by_device_id: str = ''
    created_at: str = ''
    updated_at: str = ''
    participants: List[ExpenseParticipant] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Expense':
        """Create from dictionary."""
        return cls(
            id=str(data['id']),
            group_id=str(data.get('group_id', '')),
            description=data.get('description', ''),
            total_amount=float(data.get('total_amount', 0)),
            created_by_device_id=data.get('created_by_device_id', ''),
            created_at=data.get('created_at', ''),
            updated_at=data.get('updated_at', ''),
            participants=[ExpenseParticipant.from_dict(p) for p in data.get('participants', [])]
        )


@dataclass
class DebtDetail:
    expense_id: str
    expense_name: str
    amount: float
    from_user: Optional[str] = None
    to_user: Optional[str] = None


@dataclass
class UserBalance:
    net_balance: float
    total_owed: float
    total_owing: float
    detailed_debts: List[DebtDetail] = field(default_factory=list)
    detailed_credits: List[DebtDetail] = field(default_factory=list)


@dataclass
class SimplifiedDebt:
    from_user: str
    to_user: str
    amount: float
