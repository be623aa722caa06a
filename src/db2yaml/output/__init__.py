"""
Output module for rendering the schema model.

Supports:
- YAML documents (block style, tables ordered by name)
"""

from db2yaml.output.yaml_writer import YamlWriter, render_yaml

__all__ = [
    "YamlWriter",
    "render_yaml",
]
