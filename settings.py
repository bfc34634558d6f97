# Options for the presentation side and file lookup.
# The readers themselves take no settings: a parse depends only on the
# text, the format id and the cancellation token.
#
# JSON layout accepted by load_settings():
#   {
#     "table": {"hide": true, "columnsPerLine": 8, "headerType": "Mnemonic"},
#     "plot":  {"maximumNumberOfPlots": 25, "height": 400},
#     "files": {"associations": {"*.dat": "spec-data"}, "encoding": "latin-1"}
#   }

import json
import logging
from dataclasses import dataclass, field
from typing import Dict

log = logging.getLogger(__name__)

HEADER_TYPES = ('Name', 'Mnemonic', 'None')

_KEYS = {
    ('table', 'hide'): 'hide_table',
    ('table', 'columnsPerLine'): 'columns_per_line',
    ('table', 'headerType'): 'header_type',
    ('plot', 'maximumNumberOfPlots'): 'maximum_plots',
    ('plot', 'height'): 'plot_height',
    ('files', 'associations'): 'associations',
    ('files', 'encoding'): 'encoding',
}


@dataclass
class Settings:
    columns_per_line: int = 8
    header_type: str = 'Mnemonic'
    hide_table: bool = True
    maximum_plots: int = 25
    plot_height: int = 400
    associations: Dict[str, str] = field(default_factory=dict)
    encoding: str = 'latin-1'

    def __post_init__(self):
        if self.header_type not in HEADER_TYPES:
            raise ValueError(f"headerType must be one of {HEADER_TYPES}, got {self.header_type!r}")
        if not isinstance(self.columns_per_line, int) or self.columns_per_line < 1:
            raise ValueError(f"columnsPerLine must be a positive integer, got {self.columns_per_line!r}")
        if not isinstance(self.maximum_plots, int) or self.maximum_plots < 0:
            raise ValueError(f"maximumNumberOfPlots must be a non-negative integer, got {self.maximum_plots!r}")
        if not isinstance(self.plot_height, int) or self.plot_height < 1:
            raise ValueError(f"plot height must be a positive integer, got {self.plot_height!r}")
        if not isinstance(self.associations, dict):
            raise ValueError("files.associations must be an object")


def settings_from_dict(data):
    kwargs = {}
    for section, values in data.items():
        if not isinstance(values, dict):
            log.warning("Ignoring settings entry %r", section)
            continue
        for key, value in values.items():
            attr = _KEYS.get((section, key))
            if attr is None:
                log.warning("Ignoring unknown setting %s.%s", section, key)
                continue
            kwargs[attr] = value
    return Settings(**kwargs)


def load_settings(path):
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: settings must be a JSON object")
    return settings_from_dict(data)
