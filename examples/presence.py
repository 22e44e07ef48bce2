"""
An example that sets a Rich Presence.
"""

# Rich Presence is set over the IPC socket of the Discord desktop client. Discord has to be
# running on the same machine for this to work.

# First, the required imports
import logging
import sys
import time

from discord_ipc import ActivityType, Assets, Button, IPCClient, RichPresence, Timestamps

# The library logs through the standard logging module. DEBUG shows every frame.
logging.basicConfig(level=logging.INFO)

# The client ID is the ID of your application in the Discord developer portal.
client = IPCClient(sys.argv[1])

# Connecting finds the IPC socket, opens it, and does the handshake.
client.connect()

# A presence is built by setting fields. Anything you don't set isn't sent.
presence = RichPresence(state="foo", details="bar", type=ActivityType.PLAYING)
presence.timestamps = Timestamps(start=int(time.time()))
presence.assets = Assets(large_image="large-image", large_text="Large text")
# At most two buttons are allowed.
presence.buttons = [Button("A button", "https://github.com")]

client.set_activity(presence)
print("Activity set! Press enter to exit...")
input()

# Closing the connection also removes the presence.
client.close()
