from pydantic import BaseModel, ConfigDict
from typing import TypeVar

ModelT = TypeVar("ModelT", bound="BaseGolfModel")


class BaseGolfModel(BaseModel):
    """Shared configuration and methods."""
    model_config = ConfigDict(validate_assignment=True)

    def snapshot(self: ModelT) -> ModelT:
        """Deep copy used to stage a change before committing it."""
        return self.model_copy(deep=True)
