"""Billing module router aggregation."""
from lexdesk.routers import invoices

ROUTERS = [invoices.router]
