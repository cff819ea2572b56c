"""
Application entry point
File khởi chạy ứng dụng Flask
"""
import logging
import sys

# Tải biến môi trường từ .env trước khi import cấu hình
from dotenv import load_dotenv
load_dotenv()

from app import create_app
from app import config


def main():
    try:
        app = create_app()
    except RuntimeError as exc:
        # Thiếu cấu hình storage: dừng ngay, không chạy ở chế độ thiếu chức năng
        logging.getLogger(__name__).error(f"❌ ERROR: {exc}")
        print(f"❌ ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    prefix = app.config['API_PREFIX'].rstrip('/')
    app.logger.info(f"🚀 Starting Flask application on {config.FLASK_HOST}:{config.FLASK_PORT}")
    app.logger.info(f"📡 API endpoints available at http://localhost:{config.FLASK_PORT}{prefix}")
    app.logger.info(f"🔧 Debug mode: {config.FLASK_DEBUG}")

    app.run(
        host=config.FLASK_HOST,
        port=config.FLASK_PORT,
        debug=config.FLASK_DEBUG,
        threaded=False
    )


if __name__ == '__main__':
    main()
