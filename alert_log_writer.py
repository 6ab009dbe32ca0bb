import os

LOG_DIR = "/var/log"
LOG_FILE_PREFIX = "app_hivemq_"
LOG_FILE_SUFFIX = "0001"
LOG_FILE_EXTENSION = ".log"


def log_file_path(log_dir, now):
    """Day-partitioned log file path, e.g. app_hivemq_202403050001.log"""
    file_name = f"{LOG_FILE_PREFIX}{now.strftime('%Y%m%d')}{LOG_FILE_SUFFIX}{LOG_FILE_EXTENSION}"
    return os.path.join(log_dir, file_name)


class AlertLogWriter:
    def __init__(self, log_dir=LOG_DIR):
        self.log_dir = log_dir

    def append(self, record, now):
        """Append one record to today's file; failures are dropped, never raised"""
        path = log_file_path(self.log_dir, now)
        line = record.to_json_line().encode('utf-8')

        try:
            # Unbuffered so the whole line goes out in a single write()
            with open(path, 'ab', buffering=0) as f:
                f.write(line)
        except OSError as e:
            print(f"Failed to append alert log to {path}: {e}")
            return False

        return True
