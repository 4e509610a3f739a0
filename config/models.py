from pydantic import BaseModel, Field
from typing import Optional

from core.contracts.models import DEFAULT_RECENT_COMMITS

class ContextConfig(BaseModel):
    # None means "not configured"; the hard-coded defaults apply.
    include_repo_context: Optional[bool] = Field(None, description="Add branch and recent commits to the context")
    exclude_lockfiles: Optional[bool] = Field(None, description="Leave dependency lockfiles out of the context")
    max_diff_chars: Optional[int] = Field(None, ge=0, description="Diff character budget, 0 disables truncation")
    recent_commits: int = Field(DEFAULT_RECENT_COMMITS, gt=0, description="Number of recent commits listed in the repository context")

class PromptConfig(BaseModel):
    template: Optional[str] = Field(None, description="Custom prompt template containing ${gitContext}")

class ModelConfig(BaseModel):
    api_key: Optional[str] = None


class Config(BaseModel):
    context: ContextConfig = Field(default_factory=ContextConfig, description="Commit context settings")
    prompt: PromptConfig = Field(default_factory=PromptConfig, description="Prompt template settings")
    model: ModelConfig = Field(default_factory=ModelConfig, description="LLM credentials")
