from airline_reservation.cli import main

main()
