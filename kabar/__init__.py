"""Kabar: server-rendered front end for the Kabar posts API."""

__version__ = "0.1.0"
