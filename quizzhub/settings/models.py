from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class BackendSettings(BaseModel):
    base_url: HttpUrl
    timeout_seconds: float = Field(default=10.0, gt=0)
    headers: dict[str, str] = Field(default_factory=dict)


class RouteSettings(BaseModel):
    """Route templates, relative to backend.base_url."""

    model_config = ConfigDict(extra="forbid")

    list_all: str = "quizzes"
    list_recent_by_owner: str = "quizzes?owner={user_id}&order=created_desc"
    list_by_likes: str = "quizzes?owner={user_id}&sort=likes&order={order}"
    create_quizz: str = "quizzes"
    delete_quizz: str = "quizzes/{quizz_id}"
    create_like: str = "likes"
    delete_like: str = "likes/{like_id}"
    create_completion: str = "completions"
    delete_completion: str = "completions/{completion_id}"
    set_hidden: str = "quizzes/{quizz_id}/users/{user_id}"
    create_comment: str = "comments"


class Settings(BaseModel):
    backend: BackendSettings
    routes: RouteSettings = Field(default_factory=RouteSettings)
