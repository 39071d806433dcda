"""Schemas for the JSON clock endpoints (/json, /json/{hour}/{minute})."""

from pydantic import BaseModel, Field

from litclock.services.quote_store import Quote


class QuoteResponse(BaseModel):
    """A quote for a clock time.

    `time` is the stored packed time code (hour * 100 + minute).
    """

    time: int = Field(ge=100, le=1259, examples=[1205])
    text: str
    author: str
    title: str
    link: str

    @classmethod
    def from_quote(cls, quote: Quote) -> "QuoteResponse":
        return cls(
            time=quote.time_code,
            text=quote.text,
            author=quote.author,
            title=quote.title,
            link=quote.link,
        )
