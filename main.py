"""
Chat Wordle Server - Main Entry Point

This is the main entry point for the chat Wordle server.
It initializes all services and starts the Flask-SocketIO application.
"""

from chatwordle import create_app
from chatwordle.config import Config, RoundTimings
from chatwordle.services.chat_relay import initialize_chat_relay
from chatwordle.services.game_service import initialize_game_service
from chatwordle.services.lexicon_service import WordListLexicon
from chatwordle.services.scheduler import SocketIOScheduler
from chatwordle.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    game_service = None
    chat_relay = None
    try:
        # Create Flask app
        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        # Load lexicon
        lexicon = WordListLexicon.from_file(Config.LEXICON_PATH)
        stats = lexicon.statistics()
        print(f"✓ Lexicon loaded: {stats['total_words']} target words, {stats['valid_words']} valid guesses")

        # Initialize game service
        game_service = initialize_game_service(
            lexicon,
            SocketIOScheduler(socketio),
            publish=socketio.emit,
            timings=RoundTimings.from_config(Config)
        )
        print("✓ Game service initialized successfully")

        # Initialize chat relay
        if Config.CHAT_RELAY_URL:
            chat_relay = initialize_chat_relay(Config.CHAT_RELAY_URL, game_service)
            if Config.CHAT_UNIQUE_ID:
                chat_relay.connect_stream(Config.CHAT_UNIQUE_ID)
            try:
                chat_relay.connect()
                print(f"✓ Chat relay connected at {Config.CHAT_RELAY_URL}")
            except Exception as relay_error:
                print(f"✗ Chat relay unavailable: {relay_error}")
                game_logger.logger.error(f"Chat relay connection failed: {relay_error}")
        else:
            print("✗ CHAT_RELAY_URL not configured; no chat source")

        game_service.start_round()

        game_logger.logger.info("Chat Wordle Server Starting")

        print(f"\nStarting Chat Wordle Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print(f"Host control token: {'enabled' if Config.CONTROL_TOKEN else 'disabled'}")
        print("=" * 50)

        # Start the server
        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG,
                     use_reloader=False, allow_unsafe_werkzeug=True)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Chat Wordle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise
    finally:
        if chat_relay:
            chat_relay.disconnect()
        if game_service:
            game_service.shutdown()


if __name__ == '__main__':
    main()
