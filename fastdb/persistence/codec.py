import json
from typing import Any, Dict, List

from fastdb.errors import CorruptStoreError


class RecordCodec:
    """
    Serialize the record sequence as one pretty-printed JSON array.

    File layout (indent=2):

        [
          {
            "Name": "John",
            "ID": 1
          }
        ]
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def encode(self, records: List[Dict[str, Any]]) -> str:
        """
        Convert records to a JSON document.

        Args:
            records: Full record sequence

        Returns:
            Indented JSON text
        """
        return json.dumps(records, indent=self.indent, ensure_ascii=False)

    def decode(self, text: str) -> List[Dict[str, Any]]:
        """
        Parse a JSON document back into records.

        Raises:
            json.JSONDecodeError: If the text is not valid JSON
            CorruptStoreError: If the document is not a JSON array
        """
        data = json.loads(text)
        if not isinstance(data, list):
            raise CorruptStoreError(
                f"Expected a JSON array of records, got {type(data).__name__}"
            )
        return data
