"""namecrop - 긴 파일·디렉토리 이름을 바이트 한도에 맞게 절단."""

__version__ = "0.1.0"
