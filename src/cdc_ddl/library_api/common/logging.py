import sys
import logging

# key to have logging outputs without '\n' new line.
SPECIAL_CODE = '[!n]'


class InfoStreamHandler(logging.StreamHandler):
    def __init__(self, stream=None):
        super().__init__(stream or sys.stdout)

    def format(self, record):
        return record.getMessage()

    def emit(self, record):
        if SPECIAL_CODE in record.msg:
            record.msg = record.msg.replace(SPECIAL_CODE, '')
            self.terminator = ''
        else:
            self.terminator = '\n'

        return super().emit(record)


class DebugStreamHandler(logging.StreamHandler):
    def __init__(self, stream=None):
        super().__init__(stream or sys.stderr)
        self.last_message_no_newline = False

    def format(self, record):
        formatter = logging.Formatter('%(asctime)s :: %(levelname)s :: %(name)s :: %(message)s')
        return formatter.format(record)

    def emit(self, record):
        try:
            msg = self.format(record)
            stream = self.stream
            if SPECIAL_CODE in record.msg:
                if self.last_message_no_newline:
                    msg = record.getMessage().replace(SPECIAL_CODE, "")
                else:
                    self.last_message_no_newline = True
                    msg = msg.replace(SPECIAL_CODE, "")
            else:
                if self.last_message_no_newline:
                    self.last_message_no_newline = False
                    msg = f'{record.getMessage()}\n'
                else:
                    msg = f'{msg}\n'

            stream.write(f"{msg}")
            self.flush()
        except Exception:
            self.handleError(record)


def set_debug_logger():
    set_logger(logging.DEBUG, DebugStreamHandler())


def set_info_logger():
    set_logger(logging.INFO, InfoStreamHandler())


def set_logger(level, handler: logging.StreamHandler):
    logger = logging.getLogger()
    for existing in [h for h in logger.handlers
                     if isinstance(h, (InfoStreamHandler, DebugStreamHandler))]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger():
    return logging.getLogger()
