#!/usr/bin/env python3
"""
Script para arrancar el servidor del blog (desarrollo local)
"""
import sys

try:
    import uvicorn
    from app.core.config import settings
except ImportError as e:
    print(f"❌ Error de importación: {e}")
    print("💡 Asegúrate de que las dependencias estén instaladas:")
    print("   pip install -e .")
    sys.exit(1)


if __name__ == "__main__":
    print(f"🌤️  Brunch Blog en http://localhost:{settings.PORT}")
    print(f"   📝 Posts: http://localhost:{settings.PORT}/api/posts")
    print(f"   🌤️  Clima: http://localhost:{settings.PORT}/api/weather")

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.ENV == "development",
        log_level=settings.LOG_LEVEL.lower()
    )
