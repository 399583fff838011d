"""Streaming reader for log4j XML event logs."""
