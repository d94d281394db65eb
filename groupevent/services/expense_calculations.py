#!/usr/bin/env python3
"""
Expense Calculations
Derives a member's balance from group expenses and reduces debts to one net
amount per pair of members.
"""

from typing import Dict, List, Tuple

from groupevent.models.expense_models import DebtDetail, Expense, SimplifiedDebt, UserBalance

# Net amounts at or below this are treated as settled
SETTLED_TOLERANCE = 0.01


def _sum_amounts(expense: Expense, role: str, member_id: str = None) -> float:
    return sum(
        p.individual_amount for p in expense.participants
        if p.role == role and (member_id is None or p.member_device_id == member_id)
    )


def calculate_user_balances(expenses: List[Expense], user_id: str) -> UserBalance:
    """
    Calculate what a member is owed and owes across expenses.

    When the member paid part of an expense, each ower owes them their amount
    scaled by the member's share of the payments. When the member owes, they
    owe each payer that payer's amount scaled by the member's share of the
    owed total.

    Args:
        expenses: Group expenses with participants
        user_id: Device id of the member

    Returns:
        UserBalance with totals and per-expense details
    """
    total_owed = 0.0
    total_owing = 0.0
    detailed_debts: List[DebtDetail] = []
    detailed_credits: List[DebtDetail] = []

    for expense in expenses:
        user_paid = _sum_amounts(expense, 'payer', user_id)
        user_owes = _sum_amounts(expense, 'ower', user_id)

        if user_paid > 0:
            payer_share = user_paid / _sum_amounts(expense, 'payer')
            for ower in expense.participants:
                if ower.role != 'ower':
                    continue
                amount = ower.individual_amount * payer_share
                total_owed += amount
                detailed_credits.append(DebtDetail(
                    expense_id=expense.id,
                    expense_name=expense.description,
                    amount=amount,
                    from_user=ower.member_device_id,
                    to_user=user_id
                ))

        if user_owes > 0:
            ower_share = user_owes / _sum_amounts(expense, 'ower')
            for payer in expense.participants:
                if payer.role != 'payer':
                    continue
                amount = payer.individual_amount * ower_share
                total_owing += amount
                detailed_debts.append(DebtDetail(
                    expense_id=expense.id,
                    expense_name=expense.description,
                    amount=amount,
                    from_user=user_id,
                    to_user=payer.member_device_id
                ))

    return UserBalance(
        net_balance=total_owed - total_owing,
        total_owed=total_owed,
        total_owing=total_owing,
        detailed_debts=detailed_debts,
        detailed_credits=detailed_credits
    )


def simplify_debts(debts: List[DebtDetail], credits: List[DebtDetail]) -> List[SimplifiedDebt]:
    """
    Net debts and credits into one amount per pair of members.

    Each detail reads "from_user owes to_user amount". Opposite directions
    cancel out; pairs whose net is within SETTLED_TOLERANCE are omitted.
    """
    # (a, b) with a < b; positive means a owes b
    net: Dict[Tuple[str, str], float] = {}

    for detail in list(debts) + list(credits):
        if not detail.from_user or not detail.to_user or detail.from_user == detail.to_user:
            continue
        if detail.from_user < detail.to_user:
            key, signed = (detail.from_user, detail.to_user), detail.amount
        else:
            key, signed = (detail.to_user, detail.from_user), -detail.amount
        net[key] = net.get(key, 0.0) + signed

    simplified = []
    for (first, second), amount in net.items():
        if abs(amount) <= SETTLED_TOLERANCE:
            continue
        if amount > 0:
            simplified.append(SimplifiedDebt(from_user=first, to_user=second, amount=amount))
        else:
            simplified.append(SimplifiedDebt(from_user=second, to_user=first, amount=-amount))
    return simplified


def round_to_two(num: float) -> float:
    return round(num * 100) / 100


def validate_percentages(splits: Dict[str, float]) -> bool:
    """True when the split percentages add up to 100 (within rounding)."""
    return abs(sum(splits.values()) - 100) < SETTLED_TOLERANCE
