"""Virtual terminal model: screen grid, modes, control sequences and input encoding."""