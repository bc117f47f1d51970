"""Pydantic schemas for AI-generated marketing copy."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ServiceCopy(BaseModel):
    title: str = ""
    description: str = ""


class GeneratedCopy(BaseModel):
    """Copy suggestions returned by the copy assistant.

    Accepts both snake_case and the camelCase keys the model is prompted with;
    serialize with ``by_alias=True`` for the public JSON shape.
    """

    model_config = ConfigDict(populate_by_name=True)

    tagline: str = ""
    hero_headline: str = Field(default="", alias="heroHeadline")
    hero_subheadline: str = Field(default="", alias="heroSubheadline")
    services: list[ServiceCopy] = Field(default_factory=list)
    seo_description: str = Field(default="", alias="seoDescription")


class CopyAssistRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    business_description: str = Field(default="", alias="businessDescription")
    industry: str | None = None
    business_name: str | None = Field(default=None, alias="businessName")


class PolishRequest(BaseModel):
    text: str


class PolishResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    polished: str
    original_length: int = Field(alias="originalLength")
    polished_length: int = Field(alias="polishedLength")
