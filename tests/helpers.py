from datetime import date

from budgetsim.domain import EXPENSE, INCOME, MONTHLY, ONE_TIME, YEARLY, Item


def monthly(id, amount, pay_day=None, kind=EXPENSE, **kw):
    return Item(id=id, name=id, amount=amount, cycle=MONTHLY, kind=kind, pay_day=pay_day, **kw)


def yearly(id, amount, pay_day=None, kind=EXPENSE, **kw):
    return Item(id=id, name=id, amount=amount, cycle=YEARLY, kind=kind, pay_day=pay_day, **kw)


def one_time(id, amount, pay_date, kind=EXPENSE, **kw):
    if isinstance(pay_date, str):
        pay_date = date.fromisoformat(pay_date)
    return Item(id=id, name=id, amount=amount, cycle=ONE_TIME, kind=kind, pay_date=pay_date, **kw)


def income(id, amount, pay_day=None, **kw):
    return monthly(id, amount, pay_day=pay_day, kind=INCOME, **kw)
