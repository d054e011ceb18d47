# -*- coding: utf-8 -*-
"""
Точка входа FastAPI-приложения Event Hub.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from sqlalchemy import text

from eventhub.api.v1.auth import router as auth_router
from eventhub.api.v1.events import router as events_router
from eventhub.api.v1.institutions import router as institutions_router
from eventhub.api.v1.news import router as news_router
from eventhub.api.v1.participant_registrations import \
    router as participant_registrations_router
from eventhub.api.v1.profile import router as profile_router
from eventhub.api.v1.super_admin import router as super_admin_router
from eventhub.api.v1.tests import router as tests_router
from eventhub.clients.database_client import (AsyncSessionLocal, init_db,
                                              sync_engine)
from eventhub.config.logger import configure_logger
from eventhub.config.settings import settings
from eventhub.config.uvicorn_config import setup_uvicorn_logging
from eventhub.service.cache_service import cache_service
from eventhub.service.credentials import create_default_accounts
from eventhub.utils.migration_manager import check_and_apply_migrations

logger = configure_logger(__name__)

app = FastAPI(
    title="Event Hub API",
    description="API платформы мероприятий: хакатоны, заявки, судьи и "
    "пре-квалификационные тесты",
    version="0.1.0",
    docs_url="/api/v1/docs",
    redoc_url="/api/v1/redoc",
    openapi_url="/api/v1/openapi.json",
    openapi_tags=[
        {
            "name": "🔐 Аутентификация",
            "description": "Регистрация, вход и обновление токенов",
        },
        {"name": "👤 Профиль", "description": "Профиль и личный кабинет"},
        {
            "name": "🧪 Тесты - 👨‍💼 Админ - CRUD",
            "description": "Управление каталогом пре-квалификационных тестов",
        },
        {
            "name": "🧪 Тесты - 📊 Админ - Управление попытками",
            "description": "Попытки, статистика и очистка зависших попыток",
        },
        {
            "name": "🧪 Тесты - 📚 Участник - Доступные",
            "description": "Активные и ближайшие тесты",
        },
        {
            "name": "🧪 Тесты - 🎓 Участник - Начало",
            "description": "Проверка допуска и начало попытки",
        },
        {
            "name": "🧪 Тесты - 📈 Участник - Попытки",
            "description": "История и завершение своих попыток",
        },
        {
            "name": "🧪 Тесты - 📖 Участник - Чтение",
            "description": "Просмотр теста участником",
        },
        {
            "name": "🎉 Мероприятия",
            "description": "Мероприятия, заявки участников и назначение судей",
        },
        {
            "name": "👑 Супер-администратор",
            "description": "Учетные записи организаторов и судей",
        },
        {"name": "📰 Новости", "description": "Новости и объявления"},
        {"name": "🏛️ Организации", "description": "Организации-участники и спонсоры"},
    ],
)

# Настройка CORS из настроек
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.get_cors_methods(),
    allow_headers=settings.get_cors_headers(),
)


# Middleware для логирования всех запросов
@app.middleware("http")
async def log_all_requests(request, call_next):
    if request.url.path.startswith("/api/"):
        logger.info(f"🌐 API запрос: {request.method} {request.url.path}")

    try:
        response = await call_next(request)

        if request.url.path.startswith("/api/"):
            if response.status_code >= 400:
                logger.warning(
                    f"❌ API ошибка: {request.method} {request.url.path} → {response.status_code}"
                )
            else:
                logger.info(
                    f"✅ API ответ: {request.method} {request.url.path} → {response.status_code}"
                )

        return response

    except Exception as e:
        if request.url.path.startswith("/api/"):
            logger.error(
                f"💥 Критическая ошибка API: {request.method} {request.url.path}"
            )
            error_msg = str(e)
            if len(error_msg) > 1000:
                error_msg = error_msg[:1000] + "... (содержимое обрезано)"
            logger.exception(f"Детали ошибки: {error_msg}")
        raise


def custom_openapi():
    """OpenAPI схема с Bearer авторизацией для Swagger UI."""
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
        tags=app.openapi_tags,
    )

    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "Bearer": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": "Введите ваш JWT токен в формате: Bearer <token>",
        }
    }
    openapi_schema["security"] = [{"Bearer": []}]

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi

# Подключаем роутеры с emoji тегами
app.include_router(auth_router, prefix="/api/v1/auth", tags=["🔐 Аутентификация"])
app.include_router(profile_router, prefix="/api/v1/profile", tags=["👤 Профиль"])
app.include_router(tests_router, prefix="/api/v1/tests")
app.include_router(events_router, prefix="/api/v1/events", tags=["🎉 Мероприятия"])
app.include_router(
    super_admin_router, prefix="/api/v1/super-admin", tags=["👑 Супер-администратор"]
)
app.include_router(news_router, prefix="/api/v1/news", tags=["📰 Новости"])
app.include_router(
    institutions_router, prefix="/api/v1/institutions", tags=["🏛️ Организации"]
)
app.include_router(
    participant_registrations_router,
    prefix="/api/v1/participant-registrations",
    tags=["📋 Анкеты участников"],
)


@app.on_event("startup")
async def startup_event():
    setup_uvicorn_logging()
    logger.info("🔧 Инициализация сервисов...")

    # Проверяем подключение к базе данных
    try:
        with sync_engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("✅ База данных подключена")
    except Exception as e:
        logger.error(f"❌ Ошибка подключения к базе данных: {e}")
        raise

    # Redis не критичен: без него кэш просто отключается
    try:
        if await cache_service.ping():
            logger.info("✅ Redis подключен и готов")
        else:
            logger.info("⚙️ Redis кэширование отключено")
    except Exception as e:
        logger.error(f"❌ Ошибка Redis: {e}")
        logger.warning("⚠️ Продолжаем работу без Redis кэширования")

    # Миграции, а если они отключены или не применились, создаем таблицы
    if not await check_and_apply_migrations():
        await init_db()

    async with AsyncSessionLocal() as session:
        await create_default_accounts(session)

    logger.info("🎉 Все сервисы готовы к работе!")


@app.on_event("shutdown")
async def shutdown_event():
    """Обработчик завершения приложения"""
    logger.info("🛑 Завершение работы Event Hub API")
    await cache_service.close()


@app.get("/api/v1")
async def api_root():
    """Корневой эндпоинт API."""
    return {"message": "Event Hub API работает", "version": app.version}


@app.get("/api/v1/health")
async def api_health():
    """Проверка живости приложения."""
    return {"status": "ok"}
