"""Bulk mailer entry point.

Allows running the API server via: python -m bulk_mailer
"""

from bulk_mailer.api.main import run

if __name__ == "__main__":
    run()
