"""
Demo fixtures for an empty database: branches, roles, the demo user, a starter
chart of accounts and a handful of transactions.

Seeding is idempotent; a collection that already has rows is left alone.
"""

import logging
from datetime import date, timedelta

from sqlalchemy.orm import Session

from pembukuan.models.branches import Branch
from pembukuan.models.chart_of_accounts import ChartOfAccounts
from pembukuan.models.roles import Role
from pembukuan.models.transactions import Transaction, STATUS_ACTIVE
from pembukuan.models.users import User
from pembukuan.utils.auth_utils import hash_password
from pembukuan.utils.time_utils import local_now

logger = logging.getLogger(__name__)

DEMO_EMAIL = "johndoe@gmail.com"
DEMO_PASSWORD = "strongpassword123"

BRANCHES = [
    {"id": "branch-1", "code": "JKT", "name": "Cabang Jakarta"},
    {"id": "branch-2", "code": "BDG", "name": "Cabang Bandung"},
    {"id": "branch-3", "code": "SBY", "name": "Cabang Surabaya"},
]

ADMIN_MENUS = [
    {"menu_id": "menu-1", "menu_name": "Dashboard", "path": "/dashboard"},
    {"menu_id": "menu-2", "menu_name": "Transactions", "path": "/transactions"},
    {"menu_id": "menu-3", "menu_name": "Omzet", "path": "/omzet"},
    {"menu_id": "menu-4", "menu_name": "Users Managment", "path": "/users"},
]

ROLES = [
    {"id": "role-1", "name": "Admin", "menus": ADMIN_MENUS, "role_access": ["C", "R", "U", "D"]},
    {"id": "role-2", "name": "Staff", "menus": ADMIN_MENUS[:3], "role_access": ["C", "R"]},
]

USERS = [
    {
        "id": "user-1",
        "username": "johndoe",
        "full_name": "John Doe",
        "email": DEMO_EMAIL,
        "password": DEMO_PASSWORD,
        "role_id": "role-1",
        "branches": ["branch-1", "branch-2"],
    },
]

ACCOUNTS = [
    {"account_id": "coa-1", "account_code": "1-1000", "account_name": "Kas", "account_type": "Aset"},
    {"account_id": "coa-2", "account_code": "1-1100", "account_name": "Bank", "account_type": "Aset"},
    {"account_id": "coa-3", "account_code": "4-1000", "account_name": "Pendapatan Penjualan", "account_type": "Pendapatan"},
    {"account_id": "coa-4", "account_code": "5-1000", "account_name": "Beban Bahan Baku", "account_type": "Beban"},
    {"account_id": "coa-5", "account_code": "6-1000", "account_name": "Beban Operasional", "account_type": "Beban"},
]

TRANSACTIONS = [
    # (id, days ago, type, reference, branch, account, notes, amount)
    ("trx-1", 20, "Pemasukan", "INV-2024-001", "branch-1", "coa-3", "Penjualan harian", 1500000),
    ("trx-2", 15, "Pemasukan", "INV-2024-002", "branch-2", "coa-3", "Penjualan grosir", 3250000),
    ("trx-3", 10, "Bahan Baku", "EXP-2024-001", "branch-1", "coa-4", "Pembelian tepung", 750000),
    ("trx-4", 5, "Operasional", "EXP-2024-002", "branch-2", "coa-5", "Listrik dan air", 420000),
]


def seed_database(db: Session) -> None:
    if db.query(Branch).first() is None:
        db.add_all(Branch(**b) for b in BRANCHES)
    if db.query(Role).first() is None:
        db.add_all(Role(**r) for r in ROLES)
    if db.query(User).first() is None:
        role_names = {r["id"]: r["name"] for r in ROLES}
        for u in USERS:
            data = dict(u)
            password = data.pop("password")
            db.add(User(**data, hashed_password=hash_password(password), role_name=role_names.get(u["role_id"]), is_active=True))
    if db.query(ChartOfAccounts).first() is None:
        db.add_all(ChartOfAccounts(**a, is_active=True) for a in ACCOUNTS)
    db.flush()

    if db.query(Transaction).first() is None:
        branches = {b["id"]: b for b in BRANCHES}
        accounts = {a["account_id"]: a for a in ACCOUNTS}
        now = local_now()
        for trx_id, days_ago, trx_type, reference_no, branch_id, account_id, notes, amount in TRANSACTIONS:
            created = now - timedelta(days=days_ago)
            db.add(Transaction(
                id=trx_id,
                transaction_date=date(created.year, created.month, created.day),
                transaction_type=trx_type,
                reference_no=reference_no,
                branch_id=branch_id,
                branch_name=branches[branch_id]["name"],
                account_id=account_id,
                account_code=accounts[account_id]["account_code"],
                account_name=accounts[account_id]["account_name"],
                notes=notes,
                total_amount=amount,
                status=STATUS_ACTIVE,
                files=[],
                created_at=created,
                updated_at=created,
            ))

    db.commit()
    logger.info("Demo data seeded")
