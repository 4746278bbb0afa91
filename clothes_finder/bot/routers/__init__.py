from aiogram import Router

from clothes_finder.bot.routers import search


def setup_routers() -> Router:
    router = Router()
    router.include_router(search.router)
    return router


__all__ = ["setup_routers"]
