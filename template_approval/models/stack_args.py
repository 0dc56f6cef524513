"""
Stack-args file model.

Only the keys used by the approval workflow are declared; anything else in
the file is kept but ignored here.
"""

from typing import Optional

from pydantic import BaseModel, Field


class StackArgs(BaseModel):
    """Settings read from a stack-args YAML file."""
    approved_template_location: Optional[str] = Field(
        None,
        alias="ApprovedTemplateLocation",
        description="s3://bucket/path under which approved templates are stored"
    )
    template: Optional[str] = Field(
        None,
        alias="Template",
        description="Path to the template, relative to the stack-args file"
    )
    profile: Optional[str] = Field(None, alias="Profile", description="AWS profile name")
    region: Optional[str] = Field(None, alias="Region", description="AWS region")

    @property
    def has_approved_location(self) -> bool:
        return bool(self.approved_template_location)

    class Config:
        populate_by_name = True
        extra = "allow"
        json_schema_extra = {
            "example": {
                "ApprovedTemplateLocation": "s3://approved-templates/my-stack",
                "Template": "cfn-template.yaml",
                "Profile": "sandbox",
                "Region": "eu-west-1",
            }
        }
