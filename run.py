from metascrape import create_app
from metascrape.shared.logging_config import setup_logging

# 初始化日志系统（logs/ 目录下按类型分文件）
setup_logging()

app = create_app()


if __name__ == '__main__':
    app.run(debug=True, port=5000)
