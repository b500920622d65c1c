"""Homepage function; vercel.json rewrites "/" here."""

from http.server import BaseHTTPRequestHandler

from stats_cards.server import respond


class handler(BaseHTTPRequestHandler):
    def do_GET(self):
        respond(self)

    def do_OPTIONS(self):
        respond(self)
