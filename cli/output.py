#!/usr/bin/env python3
"""
Output Formatting Module for the ERP Fixtures CLI

Formats inspection results as JSON, YAML or a plain key/value table.
"""

import json
from typing import Any, Dict, List

import yaml

OUTPUT_FORMATS = ['table', 'json', 'yaml']


class OutputFormatter:
    """Output formatter for CLI results."""

    def __init__(self, format_type: str = 'table'):
        """
        Initialize output formatter.

        Args:
            format_type: Output format (table, json, yaml)
        """
        if format_type not in OUTPUT_FORMATS:
            raise ValueError(f"Unsupported output format: {format_type}")
        self.format_type = format_type

    def format(self, data: Any) -> str:
        """
        Format data according to the configured format type.

        Args:
            data: Data to format

        Returns:
            Formatted string output
        """
        if self.format_type == 'json':
            return self.format_json(data)
        elif self.format_type == 'yaml':
            return self.format_yaml(data)
        else:
            return self.format_table(data)

    def format_json(self, data: Any) -> str:
        """Format data as JSON."""
        return json.dumps(data, indent=2, default=str)

    def format_yaml(self, data: Any) -> str:
        """Format data as YAML."""
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)

    def format_table(self, data: Any) -> str:
        """Format data as a table."""
        if isinstance(data, dict):
            return self._format_dict_table(data)
        elif isinstance(data, list):
            return self._format_list_table(data)
        else:
            return str(data)

    def _format_dict_table(self, data: Dict[str, Any]) -> str:
        lines = []
        for key, value in data.items():
            if isinstance(value, (list, dict)):
                value = f"<{len(value)} items>"
            lines.append(f"{key:20} {value}")
        return "\n".join(lines)

    def _format_list_table(self, data: List[Any]) -> str:
        if not data:
            return ""
        if not isinstance(data[0], dict):
            return "\n".join(str(item) for item in data)

        headers = list(data[0].keys())
        lines = [" | ".join(f"{h:15}" for h in headers), "-" * (len(headers) * 18)]
        for item in data:
            values = ["" if item.get(h) is None else str(item.get(h)) for h in headers]
            lines.append(" | ".join(f"{v:15}" for v in values))
        return "\n".join(lines)
