"""Expense Tracker: personal expense tracking API and client."""
