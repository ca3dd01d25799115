"""
Synthetic air traffic for map displays: a flight simulation engine and the websocket server that publishes it.
"""
