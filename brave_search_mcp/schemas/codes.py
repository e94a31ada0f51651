"""
Closed code sets accepted by the Brave Search API.

Each enum value is the canonical wire string. Parsing is a case-insensitive
exact match against those strings; unknown input raises UnknownCodeError
carrying the raw input text.
"""

from __future__ import annotations

from enum import Enum

from brave_search_mcp.exceptions import UnknownCodeError


class _WireCode(str, Enum):
    """Enum whose values are the exact strings sent upstream."""

    __kind__ = "code"

    @classmethod
    def parse(cls, value: str):
        lowered = value.lower()
        for member in cls:
            if member.value == lowered:
                return member
        raise UnknownCodeError(cls.__kind__, value)

    def to_wire_string(self) -> str:
        return self.value


class CountryCode(_WireCode):
    __kind__ = "country"

    ALL = "all"
    AR = "ar"
    AU = "au"
    AT = "at"
    BE = "be"
    BR = "br"
    CA = "ca"
    CL = "cl"
    DK = "dk"
    FI = "fi"
    FR = "fr"
    DE = "de"
    HK = "hk"
    IN = "in"
    ID = "id"
    IT = "it"
    JP = "jp"
    KR = "kr"
    MY = "my"
    MX = "mx"
    NL = "nl"
    NZ = "nz"
    NO = "no"
    CN = "cn"
    PL = "pl"
    PT = "pt"
    PH = "ph"
    RU = "ru"
    SA = "sa"
    ZA = "za"
    ES = "es"
    SE = "se"
    CH = "ch"
    TW = "tw"
    TR = "tr"
    GB = "gb"
    US = "us"

    @classmethod
    def default(cls) -> CountryCode:
        return cls.US


class LanguageCode(_WireCode):
    __kind__ = "language"

    AR = "ar"
    EU = "eu"
    BN = "bn"
    BG = "bg"
    CA = "ca"
    ZH_HANS = "zh-hans"
    ZH_HANT = "zh-hant"
    HR = "hr"
    CS = "cs"
    DA = "da"
    NL = "nl"
    EN = "en"
    EN_GB = "en-gb"
    ET = "et"
    FI = "fi"
    FR = "fr"
    GL = "gl"
    DE = "de"
    GU = "gu"
    HE = "he"
    HI = "hi"
    HU = "hu"
    IS = "is"
    IT = "it"
    JP = "jp"
    KN = "kn"
    KO = "ko"
    LV = "lv"
    LT = "lt"
    MS = "ms"
    ML = "ml"
    MR = "mr"
    NB = "nb"
    PL = "pl"
    PT_BR = "pt-br"
    PT = "pt"
    PA = "pa"
    RO = "ro"
    RU = "ru"
    SR = "sr"
    SK = "sk"
    SL = "sl"
    ES = "es"
    SV = "sv"
    TA = "ta"
    TE = "te"
    TH = "th"
    TR = "tr"
    UK = "uk"
    VI = "vi"

    @classmethod
    def default(cls) -> LanguageCode:
        return cls.EN


class Freshness(_WireCode):
    """News recency bucket."""

    __kind__ = "freshness"

    HOUR = "h"
    DAY = "d"
    WEEK = "w"
    MONTH = "m"
    YEAR = "y"
