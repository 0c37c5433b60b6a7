"""Bundled form documents.

Every JSON file in the ``templates.data`` package is a template. Its name
is the file stem; its title and description come from the document.
"""

import json
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DATA_PACKAGE = "formbuilder.application.templates.data"


class TemplateNotFoundError(Exception):
    """Raised when no bundled template has the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template not found: {name}")


@dataclass(frozen=True)
class TemplateInfo:
    name: str
    title: str
    description: str


class TemplateManager:
    """Reads the bundled form templates.

    Example:
        manager = TemplateManager()
        for info in manager.templates():
            print(f"{info.name}: {info.title}")
        manager.init_template("signup", Path("signup.json"))
    """

    def __init__(self, package: str = DATA_PACKAGE) -> None:
        self._root = resources.files(package)

    def _documents(self) -> dict[str, Any]:
        found = {}
        for entry in self._root.iterdir():
            if entry.is_file() and entry.name.endswith(".json"):
                found[entry.name.removesuffix(".json")] = entry
        return dict(sorted(found.items()))

    def names(self) -> list[str]:
        return list(self._documents())

    def template_exists(self, name: str) -> bool:
        return name in self._documents()

    def get_template(self, name: str) -> str:
        """Raw JSON text of a template.

        Raises:
            TemplateNotFoundError: If the template does not exist.
        """
        entry = self._documents().get(name)
        if entry is None:
            raise TemplateNotFoundError(name)
        return entry.read_text(encoding="utf-8")

    def load(self, name: str) -> dict[str, Any]:
        """Parsed form document of a template."""
        return json.loads(self.get_template(name))

    def templates(self) -> list[TemplateInfo]:
        infos = []
        for name in self.names():
            document = self.load(name)
            infos.append(
                TemplateInfo(
                    name=name,
                    title=document.get("title", ""),
                    description=document.get("description", ""),
                )
            )
        return infos

    def list_templates(self) -> list[tuple[str, str]]:
        """(name, description) pairs sorted by name."""
        return [(info.name, info.description) for info in self.templates()]

    def init_template(self, name: str, output_path: Path, force: bool = False) -> Path:
        """Write a template to ``output_path`` as a new form document.

        Raises:
            TemplateNotFoundError: If the template does not exist.
            FileExistsError: If the output file exists and force is False.
        """
        content = self.get_template(name)
        if not force and output_path.exists():
            raise FileExistsError(f"File already exists: {output_path}")
        output_path.write_text(content, encoding="utf-8")
        logger.info(f"Initialized {output_path} from template '{name}'")
        return output_path
