"""
Billing: the pure bill calculator plus checkout and transaction storage.

``apps.billing.calculator`` has no Django dependencies and is imported by
other apps' models, so this package must not import models at import time.
"""
