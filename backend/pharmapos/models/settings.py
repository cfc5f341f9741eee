from __future__ import annotations

from dataclasses import dataclass


SETTING_GROUPS = ("general", "inventory", "billing", "system")


@dataclass
class AppSetting:
    """
    Key-value setting. Values are stored as strings, exactly as entered on
    the settings screen; numeric readers coerce and fall back.
    """
    id: int
    key: str
    value: str
    description: str
    group: str

    def to_dict(self):
        return {
            "id": self.id,
            "key": self.key,
            "value": self.value,
            "description": self.description,
            "group": self.group,
        }
