"""HTTP API for the bulk mailer.

Author: Odiseo
Created: 2025-10-18
Version: 1.0.0
"""
