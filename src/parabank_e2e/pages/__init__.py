"""
Page modules, one per ParaBank screen.

Each module is constructed from a Playwright Page only and exposes locator
properties, form operations and trimmed-text read accessors.
"""
from .base import BasePage
from .login import LoginPage
from .register import RegisterPage
from .home import HomePage
from .open_account import OpenAccountPage
from .accounts_overview import AccountsOverviewPage
from .transfer_funds import TransferFundsPage
from .bill_pay import BillPayPage, BillPayment
from .account_activity import AccountActivityPage
from .profile import ProfilePage

__all__ = [
    'BasePage',
    'LoginPage',
    'RegisterPage',
    'HomePage',
    'OpenAccountPage',
    'AccountsOverviewPage',
    'TransferFundsPage',
    'BillPayPage',
    'BillPayment',
    'AccountActivityPage',
    'ProfilePage',
]
