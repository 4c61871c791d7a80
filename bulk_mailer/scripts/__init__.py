"""Operator scripts for the bulk mailer."""
