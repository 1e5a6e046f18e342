"""Resource 基类与请求解析工具."""
