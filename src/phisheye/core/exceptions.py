class PhishEyeError(Exception):
    pass

class ConfigError(PhishEyeError):
    pass

# Scorer errors
class InitError(PhishEyeError):
    """Model setup failed. The caller may retry initialize()."""
    pass

class NotReadyError(PhishEyeError):
    """Scorer used before initialize() with auto-initialization disabled."""
    pass

class InputError(PhishEyeError):
    """Malformed feature vector passed to the scorer."""
    pass

class ExportError(PhishEyeError):
    """Writing results to disk failed."""
    pass
