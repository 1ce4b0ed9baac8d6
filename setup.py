import pathlib
import re

import setuptools


# Everything after the "usage-end" marker of the README is only useful on
# the project page, keep it out of the package metadata.
setuptools.setup(
    long_description=re.sub(
        pattern="(?ms)^.. usage-end.*",
        repl="",
        string=pathlib.Path("README.rst").read_text(encoding="utf-8"),
        count=1,
    ),
    long_description_content_type="text/x-rst",
)
