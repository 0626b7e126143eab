# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from lobchart import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        if not configuration.APP_CONFIG_PATH.is_file():
            self._config = configuration.default_configuration()
            return

        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            self._config = configuration.default_configuration()
            return

        # Back-fill keys added after the file was written
        defaults = configuration.default_configuration()
        for key, value in defaults.items():
            if key not in self._config:
                self._config[key] = value  # type: ignore[literal-required]

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        """Drop the cached configuration so the next access reloads it from disk."""
        self._config = None
        self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        day_width: Optional[int] = None,
        bar_height: Optional[int] = None,
        bar_gap: Optional[int] = None,
        label_column_width: Optional[int] = None,
        locale: Optional[str] = None,
        log_level: Optional[str] = None,
        output_path: Optional[str] = None,
        remove_output_path: bool = False,
    ) -> None:
        self.is_dirty = True

        if day_width is not None:
            self.config["day_width"] = max(day_width, 1)
        if bar_height is not None:
            self.config["bar_height"] = max(bar_height, 1)
        if bar_gap is not None:
            self.config["bar_gap"] = max(bar_gap, 0)
        if label_column_width is not None:
            self.config["label_column_width"] = max(label_column_width, 0)
        if locale is not None:
            self.config["locale"] = locale
        if log_level is not None:
            self.config["log_level"] = log_level.upper()
        if output_path is not None:
            self.config["output_path"] = output_path
        if remove_output_path:
            self.config["output_path"] = None


CONFIGURATION_REPO = ConfigurationRepository()
