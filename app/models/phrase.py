"""
Phrase record served by the API.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Phrase(BaseModel):
    """A South African phrase, slang term or cultural expression.

    Instances are immutable. ``Phrase()`` is the zero-valued record returned
    when a random pick is requested from an empty pool.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    text: str = Field(default="", description="The phrase itself")
    category: str = Field(default="", description="Category, e.g. slang, cultural, expression")
    actual_meaning: str = Field(default="", description="What the phrase actually means in context")
    afrikaans_influence: bool = Field(
        default=False,
        strict=True,
        description="Whether the phrase has Afrikaans influence",
    )
    explain_like_im_dutch: str = Field(
        default="",
        description="Explanation for Dutch colleagues who might misunderstand the phrase",
    )
    misunderstanding_probability: float = Field(
        default=0.0,
        strict=True,
        description="Probability (0-1) that a Dutch person misunderstands the phrase",
    )
    confidence: str = Field(default="High", description="Confidence in the phrase and explanation")

    @property
    def has_dutch_explanation(self) -> bool:
        return bool(self.explain_like_im_dutch.strip())
