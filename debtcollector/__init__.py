"""
DebtCollector — Informal Debt Tracking for Discord
====================================================
Records "X owes Y $Z for reason" between members, answers "who owes whom
and how much", ranks the server's biggest debtors, and lets creditors
settle or pay down what they are owed.  Settled debts are never deleted;
they stay in the ledger as an audit trail.

Package layout::

    debtcollector/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Presentation constants (badges, limits)
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine lifecycle + async helper
    │   └── models.py      # The ``transactions`` table
    ├── engine/
    │   ├── amounts.py     # Amount normalization & display formatting
    │   ├── errors.py      # Ledger exception hierarchy
    │   ├── pagination.py  # Page slicing for transaction lists
    │   └── results.py     # Typed query results
    ├── services/
    │   ├── aggregation_service.py  # Totals, pair totals, top debtors
    │   ├── breakdown_service.py    # Per-counterparty breakdowns
    │   ├── mutation_service.py     # Record / settle / pay / write off
    │   └── embeds.py               # Discord embed builders
    ├── bot/
    │   ├── core.py        # Bot subclass, cog loader
    │   └── cogs/
    │       ├── ledger.py  # /add-debt, /debt, /owed, /top-debtors, …
    │       └── manage.py  # /transactions, /settle, /pay, /delete-debt
    └── api/
        ├── main.py        # FastAPI app
        └── routes/        # Read-only ledger endpoints
"""

__version__ = "0.1.0"
