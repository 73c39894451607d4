"""
Output Writers

Hand the final DomainInfo list to the console or a CSV file.
"""

import abc
import csv
import logging
import sys
from typing import List, Optional, TextIO

from .schemas import DomainInfo

logger = logging.getLogger(__name__)


class Writer(abc.ABC):
    @abc.abstractmethod
    def write(self, domains: List[DomainInfo]) -> None:
        """Write every domain entry."""


class StdWriter(Writer):
    """Print one domain name per line."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def write(self, domains: List[DomainInfo]) -> None:
        stream = self.stream or sys.stdout
        for domain in domains:
            print(domain.name, file=stream)


class CsvWriter(Writer):
    """Write ``name, record type, addresses`` rows to a CSV file."""

    def __init__(self, path: str):
        self.path = path

    def write(self, domains: List[DomainInfo]) -> None:
        with open(self.path, "w", newline="") as f:
            writer = csv.writer(f)
            for domain in domains:
                writer.writerow([
                    domain.name,
                    domain.record_type,
                    ", ".join(domain.addresses),
                ])
        logger.info(f"Results saved to {self.path}")
