"""Rule-based validation of decoded MIME trees.

Expectations are declared per content type: headers that must be present,
headers that should be present (warnings), substrings expected in header
values, and an optional custom check. The validator only reads the tree.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import CONTENT_TYPE, MIME_VERSION
from .decoder import decode
from .headers import HeaderCollection
from .logging import get_logger
from .part import Message, Part

logger = get_logger(__name__)


class ValidationIssueKind(str, Enum):
    """Category of a validation error."""

    MISSING_REQUIRED_HEADER = "missing_required_header"
    INVALID_HEADER_VALUE = "invalid_header_value"
    INVALID_CONTENT_TYPE = "invalid_content_type"
    MISSING_BOUNDARY = "missing_boundary"
    EMPTY_MULTIPART = "empty_multipart"
    PART_MISSING_HEADER = "part_missing_header"
    PART_INVALID_HEADER_VALUE = "part_invalid_header_value"
    CUSTOM = "custom"


_DESCRIPTIONS = {
    ValidationIssueKind.MISSING_REQUIRED_HEADER: "Missing required header: {header}",
    ValidationIssueKind.INVALID_HEADER_VALUE: (
        "Invalid header value for '{header}': expected {expected}, got {actual}"
    ),
    ValidationIssueKind.INVALID_CONTENT_TYPE: "Invalid Content-Type: {message}",
    ValidationIssueKind.MISSING_BOUNDARY: (
        "Multipart message missing boundary parameter in Content-Type"
    ),
    ValidationIssueKind.EMPTY_MULTIPART: "Multipart message contains no parts",
    ValidationIssueKind.PART_MISSING_HEADER: "Part {part_index} missing required header: {header}",
    ValidationIssueKind.PART_INVALID_HEADER_VALUE: (
        "Part {part_index} has invalid header value for '{header}': "
        "expected {expected}, got {actual}"
    ),
}


class ValidationIssue(BaseModel):
    """A single validation error."""

    kind: ValidationIssueKind = Field(description="Error category")
    header: str | None = Field(default=None, description="Header the error refers to")
    part_index: int | None = Field(default=None, description="Depth-first index of the part")
    expected: str | None = Field(default=None, description="Expected header value substring")
    actual: str | None = Field(default=None, description="Actual header value, if any")
    message: str | None = Field(default=None, description="Free text for custom or content-type errors")

    @property
    def description(self) -> str:
        template = _DESCRIPTIONS.get(self.kind)
        if template is None:
            return self.message or ""
        return template.format(
            header=self.header,
            part_index=self.part_index,
            expected=self.expected,
            actual=self.actual if self.actual is not None else "nil",
            message=self.message,
        )

    def __str__(self) -> str:
        return self.description


class ValidationResult(BaseModel):
    """Outcome of validating a message or a part."""

    is_valid: bool = Field(description="True when no errors were found")
    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def success(cls, warnings: list[str] | None = None) -> ValidationResult:
        return cls(is_valid=True, warnings=warnings or [])

    @classmethod
    def failure(
        cls,
        errors: list[ValidationIssue],
        warnings: list[str] | None = None,
    ) -> ValidationResult:
        return cls(is_valid=False, errors=errors, warnings=warnings or [])

    @classmethod
    def from_findings(cls, errors: list[ValidationIssue], warnings: list[str]) -> ValidationResult:
        return cls.failure(errors, warnings) if errors else cls.success(warnings)

    @property
    def summary(self) -> str:
        if not self.is_valid:
            return f"✗ Validation failed with {len(self.errors)} error(s)"
        if self.warnings:
            return f"✓ Validation passed with {len(self.warnings)} warning(s)"
        return "✓ Validation passed"

    def __str__(self) -> str:
        lines = [self.summary]
        if self.errors:
            lines += ["", "Errors:", *(f"  • {error.description}" for error in self.errors)]
        if self.warnings:
            lines += ["", "Warnings:", *(f"  • {warning}" for warning in self.warnings)]
        return "\n".join(lines)


CustomCheck = Callable[[HeaderCollection], list[ValidationIssue]]


class HeaderExpectation(BaseModel):
    """Header rules applied to every part of one content type."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    content_type: str = Field(description="Content type the rules apply to (stored lowercased)")
    required_headers: list[str] = Field(default_factory=list)
    recommended_headers: list[str] = Field(default_factory=list)
    expected_values: dict[str, str] = Field(
        default_factory=dict,
        description="Header name -> substring expected in its value (case-insensitive)",
    )
    custom_check: CustomCheck | None = Field(default=None, exclude=True)

    @field_validator("content_type")
    @classmethod
    def lowercase_content_type(cls, value: str) -> str:
        return value.strip().lower()

    def check(
        self,
        headers: HeaderCollection,
        part_index: int | None = None,
    ) -> tuple[list[ValidationIssue], list[str]]:
        """Apply the rules to *headers*.

        With a *part_index* the findings are reported against that part,
        otherwise against the message's top-level headers.
        """
        errors: list[ValidationIssue] = []
        warnings: list[str] = []
        in_part = part_index is not None

        for name in self.required_headers:
            if not headers.contains(name):
                kind = (
                    ValidationIssueKind.PART_MISSING_HEADER
                    if in_part
                    else ValidationIssueKind.MISSING_REQUIRED_HEADER
                )
                errors.append(ValidationIssue(kind=kind, header=name, part_index=part_index))

        for name in self.recommended_headers:
            if not headers.contains(name):
                prefix = f"Part {part_index}: " if in_part else ""
                warnings.append(f"{prefix}Recommended header '{name}' is missing")

        for name, expected in self.expected_values.items():
            actual = headers.get(name)
            if actual is not None and expected.strip().lower() in actual.strip().lower():
                continue
            kind = (
                ValidationIssueKind.PART_INVALID_HEADER_VALUE
                if in_part
                else ValidationIssueKind.INVALID_HEADER_VALUE
            )
            errors.append(
                ValidationIssue(
                    kind=kind,
                    header=name,
                    part_index=part_index,
                    expected=expected,
                    actual=actual,
                )
            )

        if self.custom_check is not None:
            errors.extend(self.custom_check(headers))

        return errors, warnings


TEXT_PLAIN = HeaderExpectation(content_type="text/plain", recommended_headers=[CONTENT_TYPE])
TEXT_HTML = HeaderExpectation(content_type="text/html", recommended_headers=[CONTENT_TYPE])
APPLICATION_JSON = HeaderExpectation(
    content_type="application/json", recommended_headers=[CONTENT_TYPE]
)
MULTIPART_MIXED = HeaderExpectation(content_type="multipart/mixed", required_headers=[CONTENT_TYPE])
MULTIPART_ALTERNATIVE = HeaderExpectation(
    content_type="multipart/alternative", required_headers=[CONTENT_TYPE]
)

DEFAULT_EXPECTATIONS = (
    TEXT_PLAIN,
    TEXT_HTML,
    APPLICATION_JSON,
    MULTIPART_MIXED,
    MULTIPART_ALTERNATIVE,
)


class MimeValidator:
    """Validate decoded messages against per-content-type expectations.

    Parts of a multipart message are numbered depth-first from 1, which
    matches their index in ``Message.parts`` when nothing is nested.
    """

    def __init__(
        self,
        expectations: list[HeaderExpectation] | tuple[HeaderExpectation, ...] = (),
        *,
        require_mime_version: bool = False,
        strict_multipart: bool = True,
    ) -> None:
        self._expectations = {exp.content_type: exp for exp in expectations}
        self.require_mime_version = require_mime_version
        self.strict_multipart = strict_multipart

    @classmethod
    def with_defaults(
        cls,
        *,
        require_mime_version: bool = False,
        strict_multipart: bool = True,
    ) -> MimeValidator:
        return cls(
            DEFAULT_EXPECTATIONS,
            require_mime_version=require_mime_version,
            strict_multipart=strict_multipart,
        )

    def expectation_for(self, content_type: str) -> HeaderExpectation | None:
        return self._expectations.get(content_type.lower())

    def validate(self, message: Message | str | bytes) -> ValidationResult:
        """Validate a message; text and bytes are decoded first.

        Decode errors propagate unchanged.
        """
        if not isinstance(message, Message):
            message = decode(message)

        errors: list[ValidationIssue] = []
        warnings: list[str] = []

        if self.require_mime_version and message.mime_version is None:
            errors.append(
                ValidationIssue(
                    kind=ValidationIssueKind.MISSING_REQUIRED_HEADER,
                    header=MIME_VERSION,
                )
            )

        envelope = message.envelope
        if envelope.content_type is None:
            errors.append(
                ValidationIssue(
                    kind=ValidationIssueKind.INVALID_CONTENT_TYPE,
                    message="Content-Type header is missing",
                )
            )
            result = ValidationResult.failure(errors, warnings)
            self._log(result)
            return result

        content_type = envelope.content_type.lower()
        if content_type.startswith("multipart/"):
            self._validate_multipart(message, errors, warnings)
            expectation = self.expectation_for(content_type)
            if expectation is not None:
                found_errors, found_warnings = expectation.check(message.headers)
                errors += found_errors
                warnings += found_warnings
        else:
            if len(message.parts) != 1:
                warnings.append(
                    f"Single-part message has {len(message.parts)} parts (expected 1)"
                )
            part_result = self.validate_part(message.parts[0], index=0)
            errors += part_result.errors
            warnings += part_result.warnings

        result = ValidationResult.from_findings(errors, warnings)
        self._log(result)
        return result

    def validate_part(self, part: Part, index: int = 0) -> ValidationResult:
        content_type = part.content_type
        if content_type is None:
            return ValidationResult.failure(
                [
                    ValidationIssue(
                        kind=ValidationIssueKind.PART_MISSING_HEADER,
                        header=CONTENT_TYPE,
                        part_index=index,
                    )
                ]
            )

        expectation = self.expectation_for(content_type)
        if expectation is None:
            return ValidationResult.success()

        errors, warnings = expectation.check(part.headers, part_index=index)
        return ValidationResult.from_findings(errors, warnings)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _problem(
        self,
        kind: ValidationIssueKind,
        warning: str,
        errors: list[ValidationIssue],
        warnings: list[str],
    ) -> None:
        if self.strict_multipart:
            errors.append(ValidationIssue(kind=kind))
        else:
            warnings.append(warning)

    def _validate_multipart(
        self,
        message: Message,
        errors: list[ValidationIssue],
        warnings: list[str],
    ) -> None:
        if message.envelope.boundary is None:
            self._problem(
                ValidationIssueKind.MISSING_BOUNDARY,
                "Multipart message should have boundary parameter",
                errors,
                warnings,
            )
            return

        sections = message.parts[1:]
        if not sections:
            self._problem(
                ValidationIssueKind.EMPTY_MULTIPART,
                "Multipart message contains no parts",
                errors,
                warnings,
            )
            return

        index = 0
        for section in sections:
            for part in section.walk():
                index += 1
                part_result = self.validate_part(part, index=index)
                errors += part_result.errors
                warnings += part_result.warnings

    @staticmethod
    def _log(result: ValidationResult) -> None:
        logger.info(
            "mime_validated",
            valid=result.is_valid,
            errors=len(result.errors),
            warnings=len(result.warnings),
        )
