"""
Configuration Loader

Loads index declarations (mapping, settings, default search fields) from
an XML file.

Example:
    <explorer>
      <indices>
        <index name="posts">
          <defaultSearchFields>
            <field>title</field>
          </defaultSearchFields>
          <mapping>
            <field name="title" type="text">
              <fields>
                <field name="raw" type="keyword"/>
              </fields>
            </field>
          </mapping>
          <settings>
            <index>
              <max_ngram_diff>2</max_ngram_diff>
            </index>
          </settings>
        </index>
      </indices>
    </explorer>

Setting leaves are strings unless typed with type="int|float|bool";
repeated <item> children form a list. Mapping attributes that read
"true"/"false" or an integer become bool or int, the way Elasticsearch
reports them.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from elasticsearch_explorer.exceptions import ConfigurationError, IndexNotDeclaredError
from elasticsearch_explorer.index_management.index_configuration import IndexConfiguration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexDeclaration:
    """
    Declared index.

    Attributes:
        configuration: Desired mapping and settings
        default_search_fields: Fields free-text queries search in
    """
    configuration: IndexConfiguration
    default_search_fields: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.configuration.name


class ConfigLoader:
    """
    Loads index declarations from an XML file.

    Parses the XML once and keeps the resulting IndexDeclaration instances.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to XML configuration file.
                        If None, uses default path relative to this module.
        """
        if config_path is None:
            # Default to index_config.xml in same directory as this module
            config_dir = Path(__file__).parent
            config_path = str(config_dir / "index_config.xml")

        self.config_path = config_path
        self._declarations: Optional[Dict[str, IndexDeclaration]] = None

    def load(self) -> Dict[str, IndexDeclaration]:
        """
        Load all index declarations from XML.

        Returns:
            Dictionary mapping index name to IndexDeclaration

        Raises:
            ConfigurationError: If configuration file is invalid or not found
        """
        if self._declarations is not None:
            return self._declarations

        config_file = Path(self.config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")

        logger.info(f"Loading index configuration from {self.config_path}")

        try:
            root = ET.parse(config_file).getroot()
        except ET.ParseError as e:
            raise ConfigurationError(f"Invalid XML syntax in {self.config_path}: {e}")

        indices_elem = root.find('indices')
        if indices_elem is None:
            raise ConfigurationError("No <indices> element found in configuration")

        declarations = {}
        for index_elem in indices_elem.findall('index'):
            name = index_elem.get('name')
            if not name:
                logger.warning("Skipping index without 'name' attribute")
                continue

            try:
                declarations[name] = self._parse_index(index_elem, name)
            except (ValueError, ConfigurationError) as e:
                raise ConfigurationError(
                    f"Failed to parse configuration for index '{name}': {e}"
                )

        if not declarations:
            raise ConfigurationError("No valid index declarations found")

        self._declarations = declarations
        logger.info(f"Loaded configuration for {len(declarations)} indices")
        return declarations

    def _parse_index(self, index_elem: ET.Element, name: str) -> IndexDeclaration:
        """Parse a single index declaration."""
        default_fields = []
        fields_elem = index_elem.find('defaultSearchFields')
        if fields_elem is not None:
            default_fields = [f.text.strip() for f in fields_elem.findall('field') if f.text]

        mapping_elem = index_elem.find('mapping')
        mapping = self._parse_fields(mapping_elem) if mapping_elem is not None else {}

        settings_elem = index_elem.find('settings')
        settings = {}
        if settings_elem is not None and len(settings_elem):
            settings = self._parse_tree(settings_elem)
            if not isinstance(settings, dict):
                raise ConfigurationError("<settings> must contain named elements, not <item> lists")

        return IndexDeclaration(
            configuration=IndexConfiguration.create(name, mapping, settings),
            default_search_fields=default_fields,
        )

    def _parse_fields(self, parent: ET.Element) -> Dict[str, Any]:
        """Parse <field> elements into a field definition mapping."""
        fields = {}
        for field_elem in parent.findall('field'):
            field_name = field_elem.get('name')
            if not field_name:
                raise ConfigurationError("Mapping <field> without 'name' attribute")

            definition: Dict[str, Any] = {
                key: self._attribute_value(value)
                for key, value in field_elem.attrib.items() if key != 'name'
            }

            sub_fields = field_elem.find('fields')
            if sub_fields is not None:
                definition['fields'] = self._parse_fields(sub_fields)

            properties = field_elem.find('properties')
            if properties is not None:
                definition['properties'] = self._parse_fields(properties)

            fields[field_name] = definition
        return fields

    @staticmethod
    def _attribute_value(value: str) -> Any:
        """Type a mapping attribute: booleans and integers, strings otherwise."""
        if value in ('true', 'false'):
            return value == 'true'
        if value.lstrip('-').isdigit():
            return int(value)
        return value

    def _parse_tree(self, elem: ET.Element) -> Any:
        """Convert a settings element into dicts, lists and typed leaves."""
        children = list(elem)

        if not children:
            return self._typed(elem)

        if all(child.tag == 'item' for child in children):
            return [self._parse_tree(child) for child in children]

        return {child.tag: self._parse_tree(child) for child in children}

    def _typed(self, elem: ET.Element) -> Any:
        text = (elem.text or '').strip()
        value_type = elem.get('type', 'str')

        if value_type == 'str':
            return text
        if value_type == 'int':
            return int(text)
        if value_type == 'float':
            return float(text)
        if value_type == 'bool':
            if text.lower() not in ('true', 'false'):
                raise ConfigurationError(f"Invalid boolean value: {text}")
            return text.lower() == 'true'

        raise ConfigurationError(f"Unknown value type '{value_type}' on <{elem.tag}>")

    def get_declaration(self, index_name: str) -> IndexDeclaration:
        """
        Get the declaration of a specific index.

        Args:
            index_name: Index name

        Returns:
            IndexDeclaration for the index

        Raises:
            ConfigurationError: If configuration cannot be loaded
            IndexNotDeclaredError: If the index is not declared
        """
        declarations = self.load()

        if index_name not in declarations:
            raise IndexNotDeclaredError(index_name, list(declarations.keys()))

        return declarations[index_name]

    def get_index_configuration(self, index_name: str) -> IndexConfiguration:
        """Get the desired configuration of a declared index."""
        return self.get_declaration(index_name).configuration

    def get_declared_indices(self) -> list[str]:
        """
        Get list of all declared index names.

        Returns:
            List of index names
        """
        declarations = self.load()
        return list(declarations.keys())

    def is_index_declared(self, index_name: str) -> bool:
        """
        Check if an index is declared.

        Args:
            index_name: Index name

        Returns:
            True if index is declared
        """
        declarations = self.load()
        return index_name in declarations
