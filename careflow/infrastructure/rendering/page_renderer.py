from __future__ import annotations

from dataclasses import dataclass
from html import escape

from careflow.application.ports.page_renderer_port import PageRendererPort
from careflow.domain.entities.account import Account


@dataclass(frozen=True)
class PageContent:
    title: str
    body: str


PAGES: dict[str, PageContent] = {
    "index": PageContent(
        title="CareFlow",
        body="<h1>CareFlow</h1><p>Modern care, one click away.</p>",
    ),
    "services": PageContent(
        title="Services",
        body="<h1>Services</h1><p>General practice, diagnostics and telehealth consultations.</p>",
    ),
    "doctors": PageContent(
        title="Doctors",
        body="<h1>Our doctors</h1><p>Meet the team behind CareFlow.</p>",
    ),
    "login": PageContent(
        title="Log in",
        body='<h1>Log in</h1><p><a class="btn" href="/auth/google">Continue with Google</a></p>',
    ),
    "signup": PageContent(
        title="Sign up",
        body='<h1>Create your account</h1><p><a class="btn" href="/auth/google">Sign up with Google</a></p>',
    ),
    "dashboard": PageContent(
        title="Patient portal",
        body="<h1>Welcome, {name}</h1><p>Signed in as {email}.</p>",
    ),
}


CHAT_WIDGET = """<button id="chat-bubble" type="button" aria-controls="chat-window">Chat</button>
    <section id="chat-window" hidden>
        <div id="chat-messages" aria-live="polite"></div>
        <form id="chat-form">
            <input id="chat-input" name="message" maxlength="2000" autocomplete="off" required>
            <button type="submit">Send</button>
        </form>
    </section>
    <script>
    (() => {
        const bubble = document.getElementById("chat-bubble");
        const panel = document.getElementById("chat-window");
        const form = document.getElementById("chat-form");
        const input = document.getElementById("chat-input");
        const messages = document.getElementById("chat-messages");
        const add = (text, sender) => {
            const el = document.createElement("div");
            el.className = "chat-message " + sender;
            el.textContent = text;
            messages.appendChild(el);
            messages.scrollTop = messages.scrollHeight;
        };
        bubble.addEventListener("click", () => { panel.hidden = !panel.hidden; });
        form.addEventListener("submit", async (event) => {
            event.preventDefault();
            const message = input.value.trim();
            if (!message) return;
            add(message, "user");
            input.value = "";
            try {
                const res = await fetch("/chat", {
                    method: "POST",
                    headers: {"Content-Type": "application/json"},
                    body: JSON.stringify({message}),
                });
                if (!res.ok) throw new Error(String(res.status));
                add((await res.json()).reply, "bot");
            } catch (err) {
                add("Chat is unavailable, please log in again.", "bot");
            }
        });
    })();
    </script>"""


class HtmlPageRenderer(PageRendererPort):
    """Minimal layout around the static page bodies.

    Every account value is escaped before it is interpolated.
    """

    def render(self, *, page: str, account: Account | None = None) -> str:
        content = PAGES[page]
        body = content.body
        if account is not None:
            body = body.format(
                name=escape(account.display_name or account.email),
                email=escape(account.email),
            )
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>{escape(content.title)}</title>
</head>
<body>
    {self._render_nav(account)}
    <main id="main-content">
        {body}
    </main>
    {self._render_chat(account)}
</body>
</html>"""

    def _render_nav(self, account: Account | None) -> str:
        links = ['<a href="/">Home</a>', '<a href="/services">Services</a>', '<a href="/doctors">Doctors</a>']
        if account is None:
            links.append('<a href="/login">Log in</a>')
        else:
            avatar = escape(account.avatar_url, quote=True)
            links.append('<a href="/dashboard">Dashboard</a>')
            links.append(f'<img class="avatar" src="{avatar}" alt="">')
            links.append('<a href="/logout">Log out</a>')
        return f"<nav>{' '.join(links)}</nav>"

    def _render_chat(self, account: Account | None) -> str:
        if account is None:
            return ""
        return CHAT_WIDGET
