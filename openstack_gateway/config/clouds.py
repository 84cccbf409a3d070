"""
clouds.yaml loader.

파일을 읽어서 dict 로만 돌려준다. 어떤 cloud / auth_type 을 쓸지는
core.openstack.credentials 쪽에서 판단한다.
"""

from pathlib import Path
from typing import Any, Dict, Union

import yaml

from openstack_gateway.core.errors import ConfigurationError


def load_clouds_config(path: Union[str, Path]) -> Dict[str, Any]:
    file_path = Path(path)
    try:
        with file_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError:
        raise ConfigurationError(f"clouds.yaml not found: {file_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing {file_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"{file_path} must contain a mapping at the top level")
    return data
