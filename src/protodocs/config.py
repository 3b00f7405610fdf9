# Copyright 2021-present StarRocks, Inc. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from typing import Optional
from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from protodocs.errors import ConfigurationError


RAW_FORMAT = 'json'
NO_EXCLUDE_FLAG = 'no-exclude'


class AppConfig(BaseSettings):
    """
    Process-wide settings for the plugin.

    protoc gives a plugin nothing but the parameter string, so everything that
    is not part of that string comes from environment variables prefixed with
    ``PROTODOCS_`` (e.g. ``PROTODOCS_LOG_LEVEL=DEBUG``).
    """

    # Logging configuration
    LOG_LEVEL: str = 'WARNING'
    LOG_FILE: str = ''  # Optional rotating log file, stderr only when empty

    # Directory that proto file names are relative to (file-level comment scan)
    PROTO_ROOT: str = '.'

    # Hyperlink targets for type labels
    SCALAR_TYPES_URL: str = ''  # Scalar types are plain text when empty
    TYPE_LINK_BASE: str = ''  # Prefix for '#MessageName' anchors

    @field_validator('LOG_LEVEL', mode='before')
    @classmethod
    def parse_level(cls, v):
        """Accept lowercase level names"""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    model_config = SettingsConfigDict(
        env_prefix='PROTODOCS_',
        case_sensitive=True,
        extra='ignore',
    )


class PluginParameter(BaseModel):
    """
    Parsed ``--doc_out`` parameter: ``{template},{output-file}[,no-exclude]``.

    ``template`` is ``None`` in raw (JSON) mode.
    """

    template: Optional[str] = None
    output_file_name: str
    no_exclude: bool = False

    @property
    def raw(self) -> bool:
        return self.template is None

    @classmethod
    def parse(cls, parameter: str, usage: str) -> 'PluginParameter':
        """
        Parse the plugin parameter string.

        Args:
            parameter: Parameter string passed by protoc
            usage: Usage text carried by the error on failure

        Raises:
            ConfigurationError: Wrong field count or unknown third field
        """
        tokens = parameter.split(',')
        if len(tokens) not in (2, 3):
            raise ConfigurationError(usage)

        no_exclude = False
        if len(tokens) == 3:
            if tokens[2] != NO_EXCLUDE_FLAG:
                raise ConfigurationError(usage)
            no_exclude = True

        template = None if tokens[0] == RAW_FORMAT else tokens[0]
        return cls(template=template, output_file_name=tokens[1], no_exclude=no_exclude)


# Global configuration instance
config = AppConfig()


def reload_config():
    """Re-read settings from the environment"""
    global config
    config = AppConfig()
    return config


def __getattr__(name: str):
    """Expose config attributes as module-level variables"""
    if hasattr(config, name):
        return getattr(config, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
