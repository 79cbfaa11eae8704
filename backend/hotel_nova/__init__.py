"""Hotel Nova - 酒店管理后端"""

__version__ = "0.1.0"
