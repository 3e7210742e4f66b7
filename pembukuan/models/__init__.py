from pembukuan.models.branches import Branch
from pembukuan.models.roles import Role
from pembukuan.models.users import User
from pembukuan.models.chart_of_accounts import ChartOfAccounts
from pembukuan.models.transactions import Transaction, TransactionFile

__all__ = ['Branch', 'ChartOfAccounts', 'Role', 'Transaction', 'TransactionFile', 'User',]
