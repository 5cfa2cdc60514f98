"""Operating-system facilities: user and group lookup and seqpacket sockets."""