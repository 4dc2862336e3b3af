from enum import Enum


class FormType(str, Enum):
    NEXTSENSE = "nextsense"
    BLOCKYFY = "blockyfy"
