from paperblog.conversion.base import BaseBlogConverter
from paperblog.conversion.converter import BlogConverter
from paperblog.conversion.factory import BlogConverterFactory

__all__ = ["BaseBlogConverter", "BlogConverter", "BlogConverterFactory"]
