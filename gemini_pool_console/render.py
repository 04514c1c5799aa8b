"""Render functions for the console views.

Each function takes the current language and data and returns the complete
view. Nothing is patched in place: callers re-render on every state change
and swap the whole view.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from gemini_pool_console.i18n import LanguageOption, LocalizationRuntime
from gemini_pool_console.masking import mask_secret
from gemini_pool_console.notices import Notice
from gemini_pool_console.types import (
    ApiKeyRecord,
    DashboardSummary,
    EditSession,
    RevealState,
)


@dataclass(frozen=True)
class InputField:
    """Labelled input with a placeholder."""

    label: str
    placeholder: str
    value: str = ""


@dataclass(frozen=True)
class LoginView:
    title: str
    subtitle: str
    username: InputField
    password: InputField
    button_label: str
    button_enabled: bool
    footer: tuple[str, ...]
    notice: Notice | None
    languages: tuple[LanguageOption, ...]

    def as_text(self) -> str:
        lines = [
            _language_bar(self.languages),
            self.title,
            self.subtitle,
            "",
            f"{self.username.label}: {self.username.value or '<' + self.username.placeholder + '>'}",
            f"{self.password.label}: {'*' * len(self.password.value) if self.password.value else '<' + self.password.placeholder + '>'}",
            f"[ {self.button_label} ]" + ("" if self.button_enabled else " (…)"),
        ]
        if self.notice is not None:
            lines += ["", _notice_line(self.notice)]
        lines += ["", *self.footer]
        return "\n".join(lines)


@dataclass(frozen=True)
class SummaryCard:
    label: str
    value: str


@dataclass(frozen=True)
class KeyRow:
    key_id: str
    name: str
    api_key: str
    status: str
    is_active: bool
    created_at: str
    requests: str
    input_tokens: str
    output_tokens: str


@dataclass(frozen=True)
class EditPanel:
    title: str
    key_id: str
    name: InputField
    is_active: bool
    api_key_label: str
    api_key_display: str
    toggle_label: str
    status_label: str
    enable_label: str
    disable_label: str
    save_label: str
    save_enabled: bool
    cancel_label: str


@dataclass(frozen=True)
class CreatePanel:
    title: str
    name: InputField
    api_key: InputField
    hint: str
    submit_label: str
    submit_enabled: bool
    cancel_label: str


@dataclass(frozen=True)
class ManagementView:
    title: str
    admin_label: str
    logout_label: str
    dashboard_title: str
    cards: tuple[SummaryCard, ...]
    section_title: str
    create_button_label: str
    headers: tuple[str, ...]
    rows: tuple[KeyRow, ...]
    edit_label: str
    delete_label: str
    edit: EditPanel | None
    create: CreatePanel | None
    notice: Notice | None
    languages: tuple[LanguageOption, ...]

    def as_text(self) -> str:
        lines = [
            _language_bar(self.languages),
            f"{self.title}    {self.admin_label} | {self.logout_label}",
            "",
            self.dashboard_title,
            "  ".join(f"{card.label}: {card.value}" for card in self.cards),
            "",
            f"{self.section_title}    [ {self.create_button_label} ]",
            " | ".join(self.headers),
        ]
        for row in self.rows:
            lines.append(
                " | ".join(
                    [
                        row.name,
                        row.api_key,
                        row.status,
                        row.created_at,
                        row.requests,
                        row.input_tokens,
                        row.output_tokens,
                        f"{self.edit_label} / {self.delete_label}",
                    ]
                )
            )
        if self.create is not None:
            lines += [
                "",
                self.create.title,
                f"{self.create.name.label}: {self.create.name.value or '<' + self.create.name.placeholder + '>'}",
                f"{self.create.api_key.label}: {self.create.api_key.value or '<' + self.create.api_key.placeholder + '>'}",
                self.create.hint,
                f"[ {self.create.submit_label} ] [ {self.create.cancel_label} ]",
            ]
        if self.edit is not None:
            lines += [
                "",
                self.edit.title,
                f"{self.edit.name.label}: {self.edit.name.value}",
                f"{self.edit.api_key_label}: {self.edit.api_key_display}  [ {self.edit.toggle_label} ]",
                f"{self.edit.status_label}: "
                + (self.edit.enable_label if self.edit.is_active else self.edit.disable_label),
                f"[ {self.edit.save_label} ] [ {self.edit.cancel_label} ]",
            ]
        if self.notice is not None:
            lines += ["", _notice_line(self.notice)]
        return "\n".join(lines)


def _language_bar(options: Sequence[LanguageOption]) -> str:
    return " ".join(f"[{o.label}]" if o.active else o.label for o in options)


def _notice_line(notice: Notice) -> str:
    return f"({notice.level.value}) {notice.message}"


def login_view(
    i18n: LocalizationRuntime,
    *,
    username: str = "",
    password: str = "",
    loading: bool = False,
    notice: Notice | None = None,
) -> LoginView:
    """Build the sign-in view for the active language."""
    t = i18n.t
    return LoginView(
        title=t("login_title"),
        subtitle=t("login_subtitle"),
        username=InputField(t("username"), t("username_placeholder"), username),
        password=InputField(t("password"), t("password_placeholder"), password),
        button_label=t("loading") if loading else t("login_button"),
        button_enabled=not loading,
        footer=(t("ai_powered"), t("version")),
        notice=notice,
        languages=tuple(i18n.language_options()),
    )


def key_row(i18n: LocalizationRuntime, record: ApiKeyRecord) -> KeyRow:
    """One table row. The secret is always masked here."""
    return KeyRow(
        key_id=record.id,
        name=record.key_name,
        api_key=mask_secret(record.api_key),
        status=i18n.t("active") if record.is_active else i18n.t("inactive"),
        is_active=record.is_active,
        created_at=i18n.format_date(record.created_at),
        requests=i18n.format_number(record.total_requests),
        input_tokens=i18n.format_number(record.total_input_tokens),
        output_tokens=i18n.format_number(record.total_output_tokens),
    )


def edit_panel(
    i18n: LocalizationRuntime,
    edit: EditSession,
    *,
    saving: bool = False,
) -> EditPanel:
    t = i18n.t
    revealed = edit.reveal is RevealState.REVEALED
    return EditPanel(
        title=t("edit_api_key"),
        key_id=edit.key_id,
        name=InputField(t("api_key_name"), t("api_key_placeholder"), edit.key_name),
        is_active=edit.is_active,
        api_key_label=t("api_key_value"),
        api_key_display=edit.secret if revealed else mask_secret(edit.secret),
        toggle_label=t("hide") if revealed else t("show"),
        status_label=t("status"),
        enable_label=t("enable"),
        disable_label=t("disable"),
        save_label=t("save_changes"),
        save_enabled=not saving,
        cancel_label=t("cancel"),
    )


def create_panel(
    i18n: LocalizationRuntime,
    *,
    creating: bool = False,
) -> CreatePanel:
    t = i18n.t
    return CreatePanel(
        title=t("create_new_api_key"),
        name=InputField(t("api_key_name"), t("api_key_placeholder")),
        api_key=InputField(t("api_key_value"), t("api_key_value_placeholder")),
        hint=t("api_key_auto_generate"),
        submit_label=t("create_api_key"),
        submit_enabled=not creating,
        cancel_label=t("cancel"),
    )


def management_view(
    i18n: LocalizationRuntime,
    *,
    records: Sequence[ApiKeyRecord] = (),
    summary: DashboardSummary | None = None,
    edit: EditSession | None = None,
    create_open: bool = False,
    saving: bool = False,
    creating: bool = False,
    notice: Notice | None = None,
) -> ManagementView:
    """Build the management view for the active language.

    Rows follow the order of ``records``.
    """
    t = i18n.t
    summary = summary or DashboardSummary()
    return ManagementView(
        title=t("management_title"),
        admin_label=t("admin_user"),
        logout_label=t("logout"),
        dashboard_title=t("dashboard"),
        cards=(
            SummaryCard(t("api_keys"), str(summary.total_api_keys)),
            SummaryCard(t("total_requests"), i18n.format_number(summary.total_requests)),
            SummaryCard(t("total_tokens"), i18n.format_number(summary.total_tokens)),
            SummaryCard(t("active_keys"), str(summary.active_keys)),
        ),
        section_title=t("api_key_management"),
        create_button_label=t("create_new_api_key"),
        headers=(
            t("table_name"),
            t("table_api_key"),
            t("table_status"),
            t("table_created_at"),
            t("table_requests"),
            t("table_input_tokens"),
            t("table_output_tokens"),
            t("table_actions"),
        ),
        rows=tuple(key_row(i18n, record) for record in records),
        edit_label=t("edit"),
        delete_label=t("delete"),
        edit=edit_panel(i18n, edit, saving=saving) if edit is not None else None,
        create=create_panel(i18n, creating=creating) if create_open else None,
        notice=notice,
        languages=tuple(i18n.language_options()),
    )
