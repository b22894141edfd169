"""
Synthetic Diagnostic Log Module

This module provides functionality to generate synthetic IoT Hub
diagnostic-log records linked together by W3C-style correlation IDs.

Components:
- hex_encoder: Turns random byte buffers into prefix/span identifiers
- correlation: Builds and parses correlation IDs
- records: Record model and one generator per operation kind
- candidates: Static device/endpoint/service name lists
- BatchBuilder: Main interface for building one batch envelope
"""

from .candidates import Candidates, DEFAULT_CANDIDATES
from .records import Record, BatchEnvelope
from .batch_builder import BatchBuilder, build_batch

__all__ = ['Candidates', 'DEFAULT_CANDIDATES', 'Record', 'BatchEnvelope', 'BatchBuilder', 'build_batch']
