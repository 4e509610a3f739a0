import os
import re
from typing import IO, Any, Dict

import yaml

from utils.errors import ConfigError

# A scalar that is exactly ${NAME}.
ENV_REFERENCE = re.compile(r"^\$\{(\w+)\}$")

# Placeholders filled in by the prompt builder, never read from the environment.
TEMPLATE_PLACEHOLDERS = frozenset({"gitContext"})


class EnvVarLoader(yaml.SafeLoader):
    """SafeLoader that reads ``${VAR_NAME}`` scalars from the environment."""

    def construct_env_reference(self, node: yaml.ScalarNode) -> str:
        scalar = self.construct_scalar(node)
        name = ENV_REFERENCE.match(scalar).group(1)
        if name in TEMPLATE_PLACEHOLDERS:
            return scalar
        value = os.environ.get(name)
        if value is None:
            raise ConfigError(f"Environment variable '{name}' not found for substitution in config.")
        return value


EnvVarLoader.add_constructor("!env", EnvVarLoader.construct_env_reference)
EnvVarLoader.add_implicit_resolver("!env", ENV_REFERENCE, None)


def load_config(config_file: IO[str]) -> Dict[str, Any]:
    """
    Parses one YAML configuration file into a dictionary.

    An empty file yields an empty dictionary.

    Raises:
        ConfigError: If the YAML is malformed, its top level is not a mapping,
            or it references an unset environment variable.
    """
    try:
        data = yaml.load(config_file, Loader=EnvVarLoader)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML configuration: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("The top level of a configuration file must be a mapping.")
    return data
