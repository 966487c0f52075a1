"""Constants and configuration for the overstrike renderer."""

class RendererConstants:
    """Central configuration constants for decoding and rendering."""

    # Control characters understood by the decoder
    BACKSPACE = '\x08'
    CARRIAGE_RETURN = '\r'
    LINE_FEED = '\n'
    UNDERSCORE = '_'  # Struck over a character to underline it

    # HTML output
    BOLD_TAG = 'b'
    UNDERLINE_TAG = 'u'
    LINE_BREAK = '\n'
    LINE_BREAK_WITH_TAG = '<br>\n'
    HTML_ESCAPES = {
        '<': '&lt;',
        '>': '&gt;',
        '&': '&amp;',
    }

    # Input handling
    DEFAULT_INPUT_ENCODING = 'utf-8'
    DEFAULT_LINE_BREAK_TAGS = False
    READ_CHUNK_SIZE = 64 * 1024  # Characters read per call when decoding a stream

    # Settings storage
    CONFIG_APP_NAME = 'overstrike'
    SETTINGS_FILENAME = 'settings.json'
