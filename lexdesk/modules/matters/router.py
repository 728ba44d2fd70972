"""Matters module router aggregation: cases, their tasks and events, and the client portal."""
from lexdesk.routers import cases, client, events, tasks

ROUTERS = [cases.router, tasks.router, events.router, client.router]
