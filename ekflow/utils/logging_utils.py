import logging
import logging.handlers
import os
import sys

def setup_queue_logging(log_queue, level: int = logging.INFO):
    """
    Configures a worker process to send its log records to a queue.
    Clears existing handlers so records are not duplicated.
    """
    root = logging.getLogger()
    if root.hasHandlers():
        root.handlers.clear()

    h = logging.handlers.QueueHandler(log_queue)
    root.addHandler(h)
    root.setLevel(level)

def setup_main_logger(log_dir: str, instance_name: str, log_queue=None, level: int = logging.INFO):
    """
    Configures the main process logger to write to a file and to stdout.
    When a queue is given, also returns a listener that forwards worker
    records from the queue to the same handlers.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_filepath = os.path.join(log_dir, f"{instance_name}.log")

    file_handler = logging.FileHandler(log_filepath, mode='w')
    file_handler.setFormatter(logging.Formatter('%(message)s'))

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(logging.Formatter('%(message)s'))

    root = logging.getLogger()
    if root.hasHandlers():
        root.handlers.clear()
    root.setLevel(level)
    root.addHandler(file_handler)
    root.addHandler(stream_handler)

    if log_queue is None:
        return None

    return logging.handlers.QueueListener(log_queue, file_handler, stream_handler)
