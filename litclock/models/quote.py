"""Literary time quote model.

One row per quote. `time` is the packed 12-hour clock time
`hour * 100 + minute` with hour in 1..12, e.g. 105 for 1:05.

Example: time=1205, text="... five past twelve ...", author="...", title="..."
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from litclock.stores.sqlite import Base


class LitTime(Base):
    """A quote that mentions a clock time."""

    __tablename__ = "littime"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Packed 12-hour time code (hour * 100 + minute)
    time: Mapped[int] = mapped_column(Integer, index=True)

    text: Mapped[str] = mapped_column(Text)
    author: Mapped[str] = mapped_column(Text, default="")
    title: Mapped[str] = mapped_column(Text, default="")
    link: Mapped[str] = mapped_column(Text, default="")

    def __repr__(self) -> str:
        return f"<LitTime {self.time} {self.title!r}>"
