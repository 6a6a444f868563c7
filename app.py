# Copyright @ISmartCoder
# Updates Channel https://t.me/abirxdhackz
import logging
import socket

from tempmail_proxy import TempMailService, create_app, load_settings

logger = logging.getLogger('tempmail_proxy')


def get_local_ip():
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect(("8.8.8.8", 80))
            return s.getsockname()[0]
    except OSError:
        return "127.0.0.1"


def build_app(settings=None):
    settings = settings or load_settings()
    service = TempMailService.from_settings(settings)
    return create_app(service)


if __name__ == "__main__":
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    app = build_app(settings)
    app.extensions['tempmail'].start_cleanup()
    local_ip = get_local_ip()
    port = settings.port
    logger.info("TempMail proxy starting (providers: %s, policy: %s)",
                ", ".join(settings.providers), settings.rotation_policy)
    logger.info("Server running on: http://%s:%s", local_ip, port)
    logger.info("API Documentation: http://%s:%s/", local_ip, port)
    logger.info("Generate Mail: http://%s:%s/api/generate", local_ip, port)
    logger.info("Check Messages: http://%s:%s/api/messages?token=YOUR_TOKEN", local_ip, port)
    app.run(host=settings.host, port=port, threaded=True)
