"""Payload models for the HOPR node REST API."""
