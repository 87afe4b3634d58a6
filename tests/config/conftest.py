from pathlib import Path
from typing import Protocol

import pytest
import yaml

from tplpatch.utils import open_utf8


class YamlConfigFileFixture(Protocol):
    """Type for yaml_config_file fixture callable."""

    def __call__(self, data: dict) -> Path:
        """Create a YAML manifest from dict data.

        Args:
            data: Dictionary to write as YAML

        Returns:
            Path to created manifest
        """
        ...


@pytest.fixture
def yaml_config_file(tmp_path: Path):
    """Fixture to create YAML manifests from dict data."""

    def _create(data: dict) -> Path:
        config_path = tmp_path / 'tplpatch.yaml'
        with open_utf8(config_path, 'w') as f:
            yaml.dump(data, f)
        return config_path

    return _create
