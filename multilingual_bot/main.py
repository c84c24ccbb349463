import logging

from fastapi import FastAPI

from multilingual_bot.api.messages import router as messages_router
from multilingual_bot.core.config import settings


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("activity_id", "user_id", "conversation_id", "language", "dialog_id", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Multilingual Bot", version="1.0.0")

app.include_router(messages_router, tags=["messages"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
