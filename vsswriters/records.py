"""
Record types produced by the writer output parser.
"""

from dataclasses import dataclass, asdict, replace
from typing import Any, Dict

from vsswriters.config import RECORD_FIELDS


@dataclass(frozen=True)
class WriterRecord:
    """
    State of one snapshot writer as reported by the diagnostic command.

    Field values are substrings of the command output: identifiers are
    stored without their braces, the state code without its brackets.
    ``computer_name`` is empty until the collector tags the record with
    the host it came from.
    """
    writer_name: str
    writer_id: str
    writer_instance_id: str
    state_code: str
    state_description: str
    last_error: str
    computer_name: str = ""

    _EXPORT_NAMES = dict(zip(
        ('computer_name', 'writer_name', 'writer_id', 'writer_instance_id',
         'state_code', 'state_description', 'last_error'),
        RECORD_FIELDS,
    ))

    def tag(self, host: str) -> 'WriterRecord':
        """Return a copy of this record attributed to ``host``."""
        return replace(self, computer_name=host)

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary keyed by the exported field names, in export order."""
        values = asdict(self)
        return {export: values[attr] for attr, export in self._EXPORT_NAMES.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WriterRecord':
        """Create instance from a dictionary using exported or attribute names."""
        kwargs = {}
        for attr, export in cls._EXPORT_NAMES.items():
            if export in data:
                kwargs[attr] = data[export]
            elif attr in data:
                kwargs[attr] = data[attr]
        return cls(**kwargs)
