# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration loading for forgerelease.

This module loads an optional YAML file over built-in defaults. Dicts are
merged recursively and lists/scalars are replaced (last wins).

Public API:

- load_config: Load defaults plus an optional YAML file
- messages_from_config, options_from_config: Version messaging settings
- transport_from_config: HttpTransport with the configured timeout and headers

Example:
    Basic usage:

        from forgerelease.config import load_config, transport_from_config

        config = load_config("forgerelease.yaml")
        transport = transport_from_config(config)
        print(config["source"]["base_url"])

"""

from .loader import (
    DEFAULT_CONFIG,
    load_config,
    messages_from_config,
    options_from_config,
    transport_from_config,
)

__all__ = [
    "DEFAULT_CONFIG",
    "load_config",
    "messages_from_config",
    "options_from_config",
    "transport_from_config",
]
