from enum import Enum


class UrlValidity(str, Enum):
    """URL可达性检查的结果"""
    VALID = "valid"
    INVALID = "invalid"
