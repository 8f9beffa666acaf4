"""
Export system for resolved design tokens.

Renders a ResolvedTokenSet as a CSS custom-property block, a Tailwind
theme extension, or a JSON document for design tool importers.
"""

import json
import os
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional

from .errors import UnsupportedFormat
from .schema import SEMANTIC_COLOR_KEYS, ResolvedTokenSet


class ExportFormat(Enum):
    """Export targets"""
    CSS = "css"                            # structural stylesheet
    SCSS = "scss"                          # reserved
    TAILWIND = "tailwind"                  # utility framework config
    FIGMA = "figma"                        # design tool tokens
    STYLE_DICTIONARY = "style-dictionary"  # reserved

    @classmethod
    def parse(cls, value: Any) -> "ExportFormat":
        """Accept a member, its value, or a descriptive target name.

        Raises:
            UnsupportedFormat: If the value names no export target
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            key = _TARGET_ALIASES.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        raise UnsupportedFormat(value)


_TARGET_ALIASES = {
    'structural-stylesheet': 'css',
    'utility-framework-config': 'tailwind',
    'design-tool-tokens': 'figma',
}


def _bare(key: str) -> str:
    return key[2:] if key.startswith('--') else key


def _js_string(value: str) -> str:
    return "'" + value.replace('\\', '\\\\').replace("'", "\\'") + "'"


class BaseExporter(ABC):
    """Abstract base class for exporters"""

    @abstractmethod
    def export(self, tokens: ResolvedTokenSet) -> str:
        """Export tokens to string format"""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get recommended file extension"""
        pass


class CSSExporter(BaseExporter):
    """Export theme and palette tokens as a :root block"""

    def export(self, tokens: ResolvedTokenSet) -> str:
        declarations = {}
        declarations.update(tokens.theme_tokens)
        declarations.update(tokens.palette_tokens)
        lines = [f"  {key}: {value};" for key, value in declarations.items()]
        return ":root {\n" + "\n".join(lines) + "\n}"

    def get_file_extension(self) -> str:
        return "css"


class TailwindExporter(BaseExporter):
    """Export semantic colors, radius and shadows as a Tailwind config"""

    def export(self, tokens: ResolvedTokenSet) -> str:
        palette = tokens.palette_tokens
        theme = tokens.theme_tokens

        colors = [
            (key[2:], palette[key])
            for key in SEMANTIC_COLOR_KEYS
            if palette.get(key)
        ]
        radius = [('DEFAULT', theme['--radius'])] if theme.get('--radius') else []
        shadows = []
        if theme.get('--shadow'):
            shadows.append(('DEFAULT', theme['--shadow']))
        if theme.get('--shadow-lg'):
            shadows.append(('lg', theme['--shadow-lg']))

        sections = [
            self._object('colors', colors),
            self._object('borderRadius', radius),
            self._object('boxShadow', shadows),
        ]
        return (
            "module.exports = {\n"
            "  theme: {\n"
            "    extend: {\n"
            + ",\n".join(sections) + "\n"
            "    }\n"
            "  }\n"
            "};"
        )

    def _object(self, name: str, entries: List[tuple]) -> str:
        indent = " " * 6
        if not entries:
            return f"{indent}{name}: {{}}"
        body = "\n".join(f"{indent}  {key}: {_js_string(value)}," for key, value in entries)
        return f"{indent}{name}: {{\n{body}\n{indent}}}"

    def get_file_extension(self) -> str:
        return "js"


class FigmaExporter(BaseExporter):
    """Export palette colors and the default radius as JSON"""

    def export(self, tokens: ResolvedTokenSet) -> str:
        document: Dict[str, Any] = {
            'name': tokens.name,
            'colors': {_bare(key): value for key, value in tokens.palette_tokens.items()},
            'radii': {},
        }
        if tokens.theme_tokens.get('--radius'):
            document['radii']['DEFAULT'] = tokens.theme_tokens['--radius']
        return json.dumps(document, indent=2)

    def get_file_extension(self) -> str:
        return "json"


class ExportManager:
    """Manages the export formats and writing results to disk"""

    def __init__(self):
        self.exporters = {
            ExportFormat.CSS: CSSExporter(),
            ExportFormat.TAILWIND: TailwindExporter(),
            ExportFormat.FIGMA: FigmaExporter(),
        }

    def export(self, tokens: ResolvedTokenSet, format: Any,
               output_path: Optional[str] = None) -> str:
        """Export tokens in the specified format.

        Raises:
            UnsupportedFormat: If the format is unknown or reserved
        """
        export_format = ExportFormat.parse(format)
        if export_format not in self.exporters:
            raise UnsupportedFormat(export_format.value)

        content = self.exporters[export_format].export(tokens)

        if output_path:
            self._write_to_file(content, output_path)

        return content

    def get_supported_formats(self) -> List[str]:
        """Get list of supported format names"""
        return [fmt.value for fmt in self.exporters.keys()]

    def get_file_extension(self, format: Any) -> str:
        """Get recommended file extension for format"""
        export_format = ExportFormat.parse(format)
        if export_format not in self.exporters:
            return "txt"
        return self.exporters[export_format].get_file_extension()

    def _write_to_file(self, content: str, file_path: str):
        """Write content to file"""
        dir_path = os.path.dirname(file_path)
        if dir_path:
            os.makedirs(dir_path, exist_ok=True)
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(content)


def format_tokens(tokens: ResolvedTokenSet, target: Any) -> str:
    """Render tokens for one export target.

    Raises:
        UnsupportedFormat: If the target is unknown or reserved
    """
    return ExportManager().export(tokens, target)
