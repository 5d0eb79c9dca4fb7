import logging
import os

from app import create_app
from app.services.translation import is_translation_enabled

logger = logging.getLogger(__name__)

app = create_app(os.getenv('FLASK_ENV', 'development'))

with app.app_context():
    if is_translation_enabled():
        logger.info(f"Translation provider: {app.config['TRANSLATION_SERVICE']}")
    else:
        logger.warning("No translation credentials configured; comments and bulk jobs will return source text")

if __name__ == '__main__':
    port = int(os.getenv('PORT', 5000))

    # Never run debug mode in production
    debug_mode = os.getenv('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes')

    app.run(host='0.0.0.0', port=port, debug=debug_mode)
