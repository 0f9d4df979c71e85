import sys
from datetime import date
from loguru import logger

def logging_setup(level: str = "INFO", file_path: str = "logs/"):

    format_info = "<green>{time:HH:mm:ss.SS}</green> | <blue>{level:<8}</blue> | <level>{message}</level>"
    format_info_logfile = "{time:HH:mm:ss.SS} | {level:<8} | {name}:{function}:{line:<8} | {message}"

    logger.remove()

    logger.add(file_path + f"out_{date.today().strftime('%m-%d')}.log", format=format_info_logfile,
               level="DEBUG", encoding="utf-8")
    logger.add(sys.stdout, colorize=True, format=format_info, level=level)
