"""HTTP and WebSocket presentation layer"""
