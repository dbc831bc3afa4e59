from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=(), interest-cohort=()",
}


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class LengthRule(BaseModel):
    min: int = 0
    max: int

    @model_validator(mode="after")
    def check_bounds(self) -> "LengthRule":
        if self.min < 0 or self.max < self.min:
            raise ValueError(f"invalid length bounds {self.min}..{self.max}")
        return self


class CommentRules(BaseModel):
    name: LengthRule = LengthRule(min=2, max=100)
    content: LengthRule = LengthRule(min=10, max=2000)


class NewsletterRules(BaseModel):
    name: LengthRule = LengthRule(min=0, max=100)


class ContactRules(BaseModel):
    name: LengthRule = LengthRule(min=2, max=100)
    email_max: int = 254
    message: LengthRule = LengthRule(min=10, max=5000)


class SubmissionRules(BaseModel):
    comment: CommentRules = CommentRules()
    newsletter: NewsletterRules = NewsletterRules()
    contact: ContactRules = ContactRules()


class RateLimitRules(BaseModel):
    max_submissions: int = Field(5, ge=1, le=100)
    window_ms: int = Field(10 * 60 * 1000, ge=1000, le=3_600_000)
    purge_interval_seconds: int = Field(60, ge=1)


class RevalidationRules(BaseModel):
    listing_path: str = "/nextgen-blog"
    post_path_prefix: str = "/nextgen-blog/"


class SecurityRules(BaseModel):
    response_headers: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_SECURITY_HEADERS)
    )


class Rules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    project: ProjectRules
    security: SecurityRules = SecurityRules()
    submissions: SubmissionRules = SubmissionRules()
    rate_limits: RateLimitRules = RateLimitRules()
    revalidation: RevalidationRules = RevalidationRules()
