"""Meter readings batch ingestion."""
