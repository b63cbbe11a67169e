"""Value tables.

Basic usage:
    from chartrender.values import read_values

    values = read_values("mysql:\\n  port: 3306\\n")
    values.table("mysql")  # {'port': 3306}
    values.path_value("mysql.port")  # 3306
"""

from ._io import dump_yaml, load_yaml, read_values, read_values_file
from ._values import Values, is_table, join_path, parse_path

__all__ = [
    "Values",
    "dump_yaml",
    "is_table",
    "join_path",
    "load_yaml",
    "parse_path",
    "read_values",
    "read_values_file",
]
