"""Canned upstream responses shared by the tests."""

WOFF2_CSS = """/* cyrillic */
@font-face {
  font-family: 'Roboto';
  font-style: normal;
  font-weight: 400;
  font-display: swap;
  src: url(https://fonts.gstatic.com/s/roboto/v1/cyrillic.woff2) format('woff2');
  unicode-range: U+0301, U+0400-045F;
}
/* latin */
@font-face {
  font-family: 'Roboto';
  font-style: normal;
  font-weight: 400;
  font-display: swap;
  src: url(https://fonts.gstatic.com/s/roboto/v1/latin.woff2) format('woff2');
  unicode-range: U+0-FF, U+131;
}
/* latin */
@font-face {
  font-family: 'Roboto';
  font-style: italic;
  font-weight: 700;
  src: url(https://fonts.gstatic.com/s/roboto/v1/latin-italic.woff2) format('woff2');
  unicode-range: U+0-FF, U+131;
}
"""

# Legacy user agents receive one unlabelled stylesheet per family
TTF_CSS = """@font-face {
  font-family: 'Roboto';
  font-style: normal;
  font-weight: 400;
  src: url(https://fonts.gstatic.com/s/roboto/v1/regular.ttf) format('truetype');
}
"""

FONT_INDEX = [
    {
        "family": "Roboto",
        "subsets": ["cyrillic", "latin"],
        "fonts": {
            "100": {"thickness": 2, "slant": 1, "width": 6, "lineHeight": 1.17},
            "400": {"thickness": 4, "slant": 1, "width": 6, "lineHeight": 1.17},
            "400i": {"thickness": 4, "slant": 4, "width": 6, "lineHeight": 1.17},
            "700": {"thickness": 7, "slant": 1, "width": 7, "lineHeight": 1.17},
        },
        "axes": [],
        "designers": ["Christian Robertson"],
    },
    {
        "family": "Inter",
        "subsets": ["latin"],
        "fonts": {
            "400": {"thickness": 4, "slant": 1, "width": 7, "lineHeight": 1.21},
            "700": {"thickness": 7, "slant": 1, "width": 7, "lineHeight": 1.21},
        },
        "axes": [
            {"tag": "opsz", "min": 14, "max": 32, "defaultValue": 14},
            {"tag": "wght", "min": 100, "max": 900, "defaultValue": 400},
        ],
    },
]
