"""Fixed sample content used when a repository yields no readable source file."""

from __future__ import annotations

from .models import ContentKind, ContentUnit


SAMPLE_VULNERABLE_CODE = '''import sqlite3

def get_user_data(username):
    conn = sqlite3.connect('users.db')
    cursor = conn.cursor()
    # Vulnerable to SQL Injection
    query = "SELECT * FROM users WHERE username = '" + username + "'"
    cursor.execute(query)
    data = cursor.fetchall()
    conn.close()
    return data

def render_profile(user_input):
    # Vulnerable to XSS
    return "<h1>Profile for " + user_input + "</h1>"
'''

_SAMPLE_QUERIES = '''# Sample code from repository analysis
# No readable source file was found; this block is a demonstration sample.

import sqlite3

def get_user(user_id):
    conn = sqlite3.connect('database.db')
    cursor = conn.cursor()

    # Vulnerable SQL query
    query = f"SELECT * FROM users WHERE id = {user_id}"
    cursor.execute(query)

    data = cursor.fetchall()
    conn.close()
    return data
'''

_SAMPLE_PAYMENTS = '''import sqlite3

def process_payment(user_id, amount):
    # Business logic vulnerability
    if amount < 0:
        return "Invalid amount"

    # No validation for duplicate payments
    save_payment(user_id, amount)
    return "Payment processed"

def save_payment(user_id, amount):
    # Hardcoded database path
    conn = sqlite3.connect('/var/data/payments.db')
    cursor = conn.cursor()
    cursor.execute(f"INSERT INTO payments VALUES ({user_id}, {amount})")
    conn.commit()
    conn.close()
'''

SYNTHETIC_UNITS: tuple[ContentUnit, ...] = (
    ContentUnit(path="synthetic/sample_queries.py", text=_SAMPLE_QUERIES, kind=ContentKind.SYNTHETIC),
    ContentUnit(path="synthetic/sample_payments.py", text=_SAMPLE_PAYMENTS, kind=ContentKind.SYNTHETIC),
)
