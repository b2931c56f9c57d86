"""Strawberry types exposed by the GraphQL API."""
