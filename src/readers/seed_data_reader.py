"""Seed data reader for loading sessions from JSON files.

This module reads clients, employees, timesheets and invoices from a JSON
document and converts them into validated model objects.

Expected format::

    {
      "clients":    [{"id": "client-1", "name": "Acme Corporation", "email": "..."}],
      "employees":  [{"id": "emp-1", "name": "John Doe", "rate": 50, "clientId": "client-1"}],
      "timesheets": [{"id": "ts-1", "employeeId": "emp-1", "weekEnding": "2023-03-17",
                      "hours": 40, "status": "approved", "submittedAt": "2023-03-15T14:30:00Z"}],
      "invoices":   [{"id": "inv-1", "clientId": "client-1", "timesheets": ["ts-1"],
                      "totalAmount": 2000, "status": "sent", "createdAt": "...",
                      "periodStart": "2023-03-08", "periodEnd": "2023-03-17"}]
    }

Keys may be camelCase or snake_case. Every section is optional.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from src.data.sample_data import Dataset, build_sample_dataset
from src.errors import describe_validation_error
from src.models.base import BaseDataModel
from src.models.client import Client, Employee
from src.models.invoice import Invoice
from src.models.timesheet import Timesheet

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseDataModel)

_SECTIONS = (
    ("clients", Client),
    ("employees", Employee),
    ("timesheets", Timesheet),
    ("invoices", Invoice),
)


def _to_snake_case(key: str) -> str:
    """Convert camelCase keys to snake_case ("weekEnding" -> "week_ending")."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


class SeedDataReader:
    """Reader for JSON seed files.

    Invalid records are skipped with a warning naming the section, the
    record index and the validation problem, so one bad row does not
    prevent the rest of the file from loading.

    Attributes:
        path: Location of the JSON file

    Example:
        >>> reader = SeedDataReader("seed.json")
        >>> dataset = reader.read()
        >>> len(dataset.employees)
        5
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read(self) -> Dataset:
        """Read and validate the seed file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a JSON object
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Seed data file not found: {self.path}")

        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Seed data file {self.path} is not valid JSON: {e}") from e

        if not isinstance(document, dict):
            raise ValueError(f"Seed data file {self.path} must contain a JSON object")

        dataset = Dataset()
        for section, model in _SECTIONS:
            records = self._parse_section(document.get(section, []), section, model)
            setattr(dataset, section, records)

        logger.info(
            f"Loaded seed data from {self.path}: {len(dataset.clients)} clients, "
            f"{len(dataset.employees)} employees, {len(dataset.timesheets)} "
            f"timesheets, {len(dataset.invoices)} invoices"
        )
        return dataset

    def _parse_section(self, rows: Any, section: str, model: Type[M]) -> List[M]:
        if not isinstance(rows, list):
            logger.warning(f"Section '{section}' is not a list; skipping it")
            return []

        records: List[M] = []
        for index, row in enumerate(rows):
            record = self._parse_row(row, section, index, model)
            if record is not None:
                records.append(record)
        return records

    def _parse_row(
        self, row: Any, section: str, index: int, model: Type[M]
    ) -> Optional[M]:
        if not isinstance(row, dict):
            logger.warning(f"Skipping {section}[{index}]: expected an object")
            return None

        normalized: Dict[str, Any] = {_to_snake_case(k): v for k, v in row.items()}
        try:
            return model.model_validate(normalized)
        except ValidationError as e:
            logger.warning(
                f"Skipping invalid {section}[{index}]: {describe_validation_error(e)}"
            )
            return None


def load_dataset(path: Optional[Union[str, Path]] = None) -> Dataset:
    """Load a seed file, or the built-in sample dataset when no path is given."""
    if path:
        return SeedDataReader(path).read()
    logger.info("No seed file configured; using the built-in sample dataset")
    return build_sample_dataset()
