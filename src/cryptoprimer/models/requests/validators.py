from typing import Annotated, Literal

from pydantic import Field, StringConstraints

Username = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=3, max_length=32, pattern=r"^[A-Za-z0-9_.-]+$"),
]

RsaKeySize = Literal[2048, 3072, 4096]

NonEmptyText = Annotated[str, Field(min_length=1)]
