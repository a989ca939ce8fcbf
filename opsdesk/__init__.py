"""Automation core for the OpsDesk business-operations suite.

The package keeps the layered layout of the host application: ``domain``
holds dataclass entities, ``infrastructure`` the SQLAlchemy models and
repositories, ``application`` the use cases and ``interfaces`` the HTTP API.
"""
